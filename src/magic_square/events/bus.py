from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# PLAYER INPUT
# ============================================================================
EVENT_CELL_ACTIVATE = "cell_activate"                  # payload: x=int, y=int
EVENT_ROUND_ADVANCE_REQUEST = "round_advance_request"  # payload: None
EVENT_ROUND_SKIP_REQUEST = "round_skip_request"        # payload: None
EVENT_GAME_RESET_REQUEST = "game_reset_request"        # payload: None
EVENT_RESET_TAP = "reset_tap"                          # payload: None


# ============================================================================
# BOARD
# ============================================================================
EVENT_BOARD_CHANGED = "board_changed"    # payload: reason=str, positions=list[(x,y)]
EVENT_BOARD_SOLVED = "board_solved"      # payload: size=int


# ============================================================================
# PROGRESSION
# ============================================================================
EVENT_MOVE_MADE = "move_made"              # payload: x=int, y=int, move=int
EVENT_ROUND_WON = "round_won"              # payload: level=int, round=int, move=int
EVENT_ROUND_STARTED = "round_started"      # payload: level=int, round=int, size=int
EVENT_LEVEL_ADVANCED = "level_advanced"    # payload: previous_level=int, level=int
EVENT_GAME_OVER = "game_over"              # payload: level=int, round=int
EVENT_GAME_RESET = "game_reset"            # payload: reason=str


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"  # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_STATE_RESTORED = "state_restored"        # payload: level=int, round=int, move=int
