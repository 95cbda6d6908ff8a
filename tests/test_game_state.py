from esper import World

from magic_square.components.game_state import GameMode, GameState
from magic_square.events.bus import EVENT_GAME_MODE_CHANGED, EventBus
from magic_square.utils.game_state import get_game_mode, set_game_mode


def test_set_game_mode_emits_only_on_change():
    world = World()
    bus = EventBus()
    world.create_entity(GameState(mode=GameMode.PLAYING))
    changes = []
    bus.subscribe(EVENT_GAME_MODE_CHANGED, lambda sender, **payload: changes.append(payload))

    set_game_mode(world, bus, GameMode.PLAYING)
    assert changes == []

    set_game_mode(world, bus, GameMode.ROUND_WON)
    assert changes == [{"previous_mode": GameMode.PLAYING, "new_mode": GameMode.ROUND_WON}]
    assert get_game_mode(world) == GameMode.ROUND_WON


def test_set_game_mode_creates_state_when_missing():
    world = World()
    bus = EventBus()
    assert get_game_mode(world) is None
    set_game_mode(world, bus, GameMode.GAME_OVER)
    assert get_game_mode(world) == GameMode.GAME_OVER
