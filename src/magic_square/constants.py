# Grid limits. Level 1 plays on a 2x2 board, level 8 on a 9x9 board.
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 9
# The persisted cell array always holds the largest board so its shape never
# changes between levels.
BACKING_CELLS = MAX_GRID_SIZE * MAX_GRID_SIZE

# Default game balance.
MAX_ROUNDS_PER_LEVEL = 7
MAX_GAME_LEVEL = 8
SCRAMBLE_ACTIVATIONS = 2
RESET_TAP_THRESHOLD = 10

# Persistence keys shared with the external store.
KEY_GAME_LEVEL = "game_level"
KEY_GAME_MOVE = "game_move"
KEY_GAME_ROUND = "game_round"
KEY_GAME_BOXES = "game_boxes"
