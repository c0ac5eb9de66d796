import pytest

from models import Course, CourseHole, GameConfig, GameFormat, GameStatus, Player, WolfHoleRecord
from scoring import engine
from scoring.exceptions import IncompleteHoleInput, InvalidHoleInput
from storage import (
    DuplicateError,
    GameManager,
    InMemoryGameRepository,
    NotFoundError,
    VersionConflictError,
)


def _build_course():
    return Course(name="Test Course", holes=[CourseHole(number=i, par=4, stroke_index=i) for i in range(1, 19)])


def _build_players(*names):
    return [Player(name=n) for n in names]


# ================================================================
# InMemoryGameRepository
# ================================================================

@pytest.mark.asyncio
async def test_repository_versions_and_conflicts():
    repo = InMemoryGameRepository()
    game = engine.create_game(_build_course(), GameConfig(format=GameFormat.SKINS), _build_players("A", "B"), game_id="g1")

    created = await repo.create_game(game)
    assert created.version == 1

    saved = await repo.save_game(created, expected_version=1)
    assert saved.version == 2

    with pytest.raises(VersionConflictError):
        await repo.save_game(created, expected_version=1)

    with pytest.raises(DuplicateError):
        await repo.create_game(game)


@pytest.mark.asyncio
async def test_repository_hands_out_copies():
    repo = InMemoryGameRepository()
    game = engine.create_game(_build_course(), GameConfig(format=GameFormat.SKINS), _build_players("A", "B"), game_id="g1")
    await repo.create_game(game)

    loaded = await repo.get_game("g1")
    loaded.name = "changed"
    assert (await repo.get_game("g1")).name is None


@pytest.mark.asyncio
async def test_repository_list_and_delete():
    repo = InMemoryGameRepository()
    game = engine.create_game(_build_course(), GameConfig(format=GameFormat.SKINS), _build_players("A", "B"), game_id="g1")
    await repo.create_game(game)

    assert len(await repo.list_games()) == 1
    assert await repo.list_games(status=GameStatus.FINISHED) == []
    assert await repo.delete_game("g1") is True
    assert await repo.delete_game("g1") is False
    assert await repo.get_game("g1") is None

    with pytest.raises(NotFoundError):
        await repo.save_game(game, expected_version=1)


# ================================================================
# GameManager
# ================================================================

@pytest.mark.asyncio
async def test_manager_plays_a_game():
    manager = GameManager()
    game = await manager.create_game(
        _build_course(), GameConfig(format=GameFormat.MATCH_PLAY, planned_holes=2), players=_build_players("A", "B")
    )
    assert game.status == GameStatus.IN_PROGRESS
    assert game.version == 1

    record = await manager.submit_hole(game.id, 1, [3, 4], expected_version=1)
    assert record.result == 1

    await manager.submit_hole(game.id, 2, [4, 4])
    finished = await manager.get_game(game.id)
    assert finished.status == GameStatus.FINISHED
    assert finished.version == 3

    result = await manager.get_result(game.id)
    assert result.winner == "A"
    assert result.final_result == "1 Up"


@pytest.mark.asyncio
async def test_manager_stale_version_is_rejected():
    manager = GameManager()
    game = await manager.create_game(
        _build_course(), GameConfig(format=GameFormat.SKINS), players=_build_players("A", "B")
    )
    await manager.submit_hole(game.id, 1, [4, 5], expected_version=1)

    with pytest.raises(VersionConflictError):
        await manager.submit_hole(game.id, 2, [4, 5], expected_version=1)


@pytest.mark.asyncio
async def test_manager_bad_input_is_not_saved():
    manager = GameManager()
    game = await manager.create_game(
        _build_course(), GameConfig(format=GameFormat.SKINS), players=_build_players("A", "B")
    )

    with pytest.raises(IncompleteHoleInput):
        await manager.submit_hole(game.id, 1, [4, None])

    with pytest.raises(InvalidHoleInput):
        await manager.submit_hole(game.id, 1, [4, "four"])

    stored = await manager.get_game(game.id)
    assert stored.holes == []
    assert stored.version == 1


@pytest.mark.asyncio
async def test_manager_builds_format_input():
    manager = GameManager()
    game = await manager.create_game(
        _build_course(), GameConfig(format=GameFormat.WOLF), players=_build_players("A", "B", "C")
    )
    record = await manager.submit_hole(game.id, 1, [4, 4, 3], wolf_choice="lone")

    assert isinstance(record, WolfHoleRecord)
    assert record.points == (0, 0, 3)


@pytest.mark.asyncio
async def test_manager_edit_and_continue():
    manager = GameManager()
    game = await manager.create_game(
        _build_course(), GameConfig(format=GameFormat.MATCH_PLAY, planned_holes=1), players=_build_players("A", "B")
    )
    await manager.submit_hole(game.id, 1, [4, 4])
    halved = await manager.get_game(game.id)
    assert halved.status == GameStatus.FINISHED

    extended = await manager.continue_playing(game.id, 1)
    assert extended.status == GameStatus.IN_PROGRESS

    edited = await manager.edit_hole(game.id, 1, [3, 4])
    assert edited.state.match_status == 1
    assert edited.state.holes_remaining == 1


@pytest.mark.asyncio
async def test_manager_unknown_game():
    with pytest.raises(NotFoundError):
        await GameManager().get_game("missing")
