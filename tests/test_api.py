import pytest
from fastapi.testclient import TestClient

from api.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


def _course_payload(n=18):
    return {
        "name": "Test Course",
        "holes": [{"number": i, "par": 4, "stroke_index": i} for i in range(1, n + 1)],
    }


def _create(client, fmt="match_play", players=("Alice", "Bob"), teams=None, **config):
    payload = {
        "name": "Saturday game",
        "course": _course_payload(),
        "config": {"format": fmt, **config},
        "players": [{"name": n} for n in players] if not teams else [],
        "teams": teams or [],
    }
    return client.post("/api/games", json=payload)


# ================================================================
# Games
# ================================================================

def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_create_and_get_game(client):
    resp = _create(client)
    assert resp.status_code == 201
    game = resp.json()
    assert game["status"] == "in_progress"
    assert game["version"] == 1

    fetched = client.get(f"/api/games/{game['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Saturday game"

    listing = client.get("/api/games").json()
    assert listing[0]["id"] == game["id"]
    assert listing[0]["holes_played"] == 0


def test_create_with_bad_roster(client):
    resp = _create(client, players=("Alice", "Bob", "Carol"))
    assert resp.status_code == 400


def test_unknown_game(client):
    assert client.get("/api/games/missing").status_code == 404
    assert client.delete("/api/games/missing").status_code == 404


# ================================================================
# Holes
# ================================================================

def test_submit_hole_and_leaderboard(client):
    game_id = _create(client).json()["id"]

    resp = client.post(f"/api/games/{game_id}/holes", json={"hole_number": 1, "scores": [3, 4]})
    assert resp.status_code == 201
    assert resp.json()["result"] == 1

    board = client.get(f"/api/games/{game_id}/leaderboard").json()
    assert board["match_status"] == "Alice 1 Up, 17 to play"
    assert board["winner"] is None
    assert board["result"] == "Alice 1 Up, 17 to play"
    assert board["standings"][0]["name"] == "Alice"


def test_submit_incomplete_hole(client):
    game_id = _create(client).json()["id"]
    resp = client.post(f"/api/games/{game_id}/holes", json={"hole_number": 1, "scores": [3, None]})
    assert resp.status_code == 422


def test_submit_with_stale_version(client):
    game_id = _create(client).json()["id"]
    client.post(f"/api/games/{game_id}/holes", json={"hole_number": 1, "scores": [3, 4], "expected_version": 1})
    resp = client.post(
        f"/api/games/{game_id}/holes", json={"hole_number": 2, "scores": [3, 4], "expected_version": 1}
    )
    assert resp.status_code == 409


def test_wolf_hole_keeps_format_fields(client):
    game_id = _create(client, fmt="wolf", players=("A", "B", "C", "D")).json()["id"]
    resp = client.post(
        f"/api/games/{game_id}/holes",
        json={"hole_number": 1, "scores": [4, 4, 4, 3], "wolf_choice": "lone", "doubled": True},
    )
    body = resp.json()
    assert body["multiplier"] == 2
    assert body["points"] == [0, 0, 0, 6]
    assert body["input"]["wolf_choice"] == "lone"


def test_edit_and_finish_then_continue(client):
    game_id = _create(client, planned_holes=1).json()["id"]
    client.post(f"/api/games/{game_id}/holes", json={"hole_number": 1, "scores": [4, 4]})

    result = client.get(f"/api/games/{game_id}/result").json()
    assert result["is_tie"] is True
    assert result["winner"] is None

    resp = client.post(f"/api/games/{game_id}/holes", json={"hole_number": 2, "scores": [4, 4]})
    assert resp.status_code == 409

    continued = client.post(f"/api/games/{game_id}/continue", json={"extra_holes": 1})
    assert continued.json()["status"] == "in_progress"

    edited = client.put(f"/api/games/{game_id}/holes/1", json={"scores": [3, 4]})
    assert edited.status_code == 200
    assert edited.json()["state"]["match_status"] == 1


def test_delete_game(client):
    game_id = _create(client, fmt="skins").json()["id"]
    assert client.delete(f"/api/games/{game_id}").status_code == 204
    assert client.get(f"/api/games/{game_id}").status_code == 404


def test_edit_that_would_drop_holes_needs_truncate(client):
    game_id = _create(client, planned_holes=3).json()["id"]
    for number, scores in ((1, [3, 4]), (2, [4, 4]), (3, [3, 4])):
        client.post(f"/api/games/{game_id}/holes", json={"hole_number": number, "scores": scores})

    refused = client.put(f"/api/games/{game_id}/holes/2", json={"scores": [3, 4]})
    assert refused.status_code == 409
    assert len(client.get(f"/api/games/{game_id}").json()["holes"]) == 3

    applied = client.put(f"/api/games/{game_id}/holes/2", json={"scores": [3, 4], "truncate": True})
    assert applied.status_code == 200
    assert applied.json()["final_result"] == "2 & 1"
    assert len(applied.json()["holes"]) == 2
