"""FastAPI application for the golf games engine."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storage.manager import GameManager

load_dotenv()

logging.basicConfig(
    level=os.environ.get("GOLF_ENGINE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _cors_origins() -> list:
    raw = os.environ.get("GOLF_ENGINE_CORS_ORIGINS", "http://localhost:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Attach an in-memory GameManager for the life of the process."""
    app.state.game_manager = GameManager()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Games Engine",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import games
    app.include_router(games.router, prefix="/api/games", tags=["games"])

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
