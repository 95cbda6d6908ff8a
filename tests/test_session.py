"""End-to-end checks through the session object a UI would hold."""
import random
from pathlib import Path

from magic_square.components.game_state import GameMode
from magic_square.events.bus import EVENT_ROUND_WON
from magic_square.session import GameSession
from magic_square.utils.store import JsonFileStore, MemoryStore


def _session(seed: int = 0, store=None) -> GameSession:
    return GameSession.create(store=store or MemoryStore(), rng=random.Random(seed))


def test_new_session_exposes_initial_state():
    session = _session()
    assert (session.level, session.round, session.move) == (1, 1, 0)
    assert session.grid_size == 2
    assert session.rounds_in_level == 7
    assert session.level_label == "2x2"
    assert session.mode == GameMode.PLAYING
    assert session.is_solved is False
    assert session.is_game_over is False
    assert session.is_last_round_of_level is False
    assert session.is_level_over is False
    assert session.cells() == [False] * 4


def test_solving_the_first_round_through_the_session():
    session = _session()
    wins = []
    session.subscribe(EVENT_ROUND_WON, lambda sender, **payload: wins.append(payload))

    for x, y in [(0, 0), (1, 1), (1, 0), (0, 1)]:
        session.activate(x, y)

    assert session.is_solved
    assert session.mode == GameMode.ROUND_WON
    assert session.show_continue
    assert wins == [{"level": 1, "round": 1, "move": 4}]

    session.advance()
    assert session.round == 2
    assert session.move == 0
    assert not session.is_solved


def test_restore_then_play_on():
    store = MemoryStore()
    session = _session(store=store)
    session.restore()
    assert (session.level, session.round, session.move) == (1, 1, 1)

    session.activate(0, 0)
    assert session.move == 2
    assert store.read()["game_move"] == 2


def test_session_state_survives_a_restart(tmp_path):
    save_path = Path(tmp_path) / "magic_square.json"
    first = GameSession.create(save_path=save_path, rng=random.Random(1))
    first.skip_round()
    first.skip_round()
    first.activate(1, 0)
    saved = first.snapshot()

    second = GameSession.create(store=JsonFileStore(save_path), rng=random.Random(2))
    second.restore()
    assert second.round == 3
    assert second.move == saved.move
    assert second.cells() == first.cells()


def test_reset_and_reset_gesture():
    session = _session()
    session.skip_round()
    session.reset()
    assert (session.level, session.round, session.move) == (1, 1, 0)

    session.skip_round()
    for _ in range(10):
        session.reset_request()
    assert session.round == 2
    session.reset_request()
    assert session.round == 1


def test_new_game_deals_blank_first_round():
    session = _session()
    session.skip_round()
    session.activate(0, 0)
    session.new_game()
    assert (session.level, session.round, session.move) == (1, 1, 0)
    assert session.cells() == [False] * 4


def test_cell_reads_board_coordinates():
    session = _session()
    session.activate(0, 0)
    assert session.cell(0, 0) is True
    assert session.cell(1, 0) is True
    assert session.cell(0, 1) is True
    assert session.cell(1, 1) is False
    assert session.cell(5, 5) is False


def test_session_without_store_or_path_stays_in_memory():
    session = GameSession.create(rng=random.Random(0))
    assert isinstance(session.persistence.store, MemoryStore)
    session.activate(0, 0)
    assert session.persistence.store.read()["game_move"] == 1
