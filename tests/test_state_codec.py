from magic_square.constants import BACKING_CELLS
from magic_square.utils.state_codec import GameSnapshot, decode, encode


def test_missing_snapshot_uses_defaults():
    snapshot = decode(None)
    assert (snapshot.level, snapshot.move, snapshot.round) == (1, 1, 1)
    assert snapshot.cells == [False] * BACKING_CELLS


def test_integers_are_floored_at_one():
    snapshot = decode({"game_level": 0, "game_move": 0, "game_round": -4})
    assert (snapshot.level, snapshot.move, snapshot.round) == (1, 1, 1)


def test_malformed_values_fall_back_to_defaults():
    snapshot = decode({
        "game_level": "three",
        "game_move": None,
        "game_round": [2],
        "game_boxes": "XXXX",
    })
    assert (snapshot.level, snapshot.move, snapshot.round) == (1, 1, 1)
    assert snapshot.cells == [False] * BACKING_CELLS

    snapshot = decode({
        "game_level": float("inf"),
        "game_move": float("-inf"),
        "game_round": float("nan"),
    })
    assert (snapshot.level, snapshot.move, snapshot.round) == (1, 1, 1)


def test_cell_array_with_non_bool_items_loads_all_off():
    snapshot = decode({"game_boxes": ["false", 0, {}, True]})
    assert snapshot.cells == [False] * BACKING_CELLS

    snapshot = decode({"game_boxes": [True, 1]})
    assert snapshot.cells == [False] * BACKING_CELLS


def test_level_is_capped_at_last_level():
    assert decode({"game_level": 40}).level == 8
    assert decode({"game_level": 40}, max_level=3).level == 3


def test_short_cell_array_is_padded():
    snapshot = decode({"game_boxes": [True, False, True]})
    assert snapshot.cells[:3] == [True, False, True]
    assert len(snapshot.cells) == BACKING_CELLS


def test_encode_uses_store_keys():
    cells = [False] * BACKING_CELLS
    cells[4] = True
    payload = encode(GameSnapshot(level=3, move=12, round=2, cells=cells))
    assert payload["game_level"] == 3
    assert payload["game_move"] == 12
    assert payload["game_round"] == 2
    assert payload["game_boxes"] == cells
    assert decode(payload) == GameSnapshot(level=3, move=12, round=2, cells=cells)
