from fastapi import Request
from storage.manager import GameManager


def get_manager(request: Request) -> GameManager:
    """FastAPI dependency that provides the GameManager."""
    return request.app.state.game_manager
