import random

from esper import World

from magic_square.components.game_progress import GameProgress
from magic_square.components.game_rules import GameRules
from magic_square.components.game_state import GameMode, GameState
from magic_square.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.PLAYING,
    *,
    rules: GameRules | None = None,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "rules", rules or GameRules())

    # Global game state resource plus the session counters.
    world.create_entity(GameState(mode=initial_mode))
    world.create_entity(GameProgress())
    return world
