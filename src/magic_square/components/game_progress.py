from dataclasses import dataclass


@dataclass(slots=True)
class GameProgress:
    """Level, round and move counters for the running session."""

    level: int = 1
    round: int = 1
    move: int = 0
    game_over: bool = False
