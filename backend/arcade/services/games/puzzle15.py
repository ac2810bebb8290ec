from arcade.errors import IllegalEvent
from .base import PLAYING, GameKernel, GameType

SIZE = 4
GOAL = list(range(1, SIZE * SIZE)) + [0]  # 0 is the blank

BASE_POINTS = 400
TIME_BONUS_CAP = 300
MOVE_PENALTY = 5


def is_solvable(board) -> bool:
    inversions = 0
    tiles = [t for t in board if t]
    for i in range(len(tiles)):
        for j in range(i + 1, len(tiles)):
            if tiles[i] > tiles[j]:
                inversions += 1
    blank_row_from_bottom = SIZE - board.index(0) // SIZE
    if blank_row_from_bottom % 2 == 0:
        return inversions % 2 == 1
    return inversions % 2 == 0


def shuffle_solvable(rng):
    board = list(GOAL)
    rng.shuffle(board)
    if not is_solvable(board):
        # Swapping two tiles flips inversion parity
        a, b = [i for i, t in enumerate(board) if t][:2]
        board[a], board[b] = board[b], board[a]
    return board


def can_slide(board, index) -> bool:
    blank = board.index(0)
    r1, c1 = divmod(index, SIZE)
    r2, c2 = divmod(blank, SIZE)
    return (r1 == r2 and abs(c1 - c2) == 1) or (c1 == c2 and abs(r1 - r2) == 1)


def solve_score(seconds, moves) -> int:
    time_bonus = max(0, TIME_BONUS_CAP - seconds)
    return max(0, BASE_POINTS + time_bonus - moves * MOVE_PENALTY)


class FifteenPuzzle(GameKernel):
    game_type = GameType.PUZZLE15
    title = '15 Puzzle'
    tick_phases = (PLAYING,)

    def new_game(self, state, rng):
        board = shuffle_solvable(rng)
        while board == GOAL:
            board = shuffle_solvable(rng)
        state['board'] = board
        state['moves'] = 0
        state['seconds'] = 0
        state['phase'] = PLAYING

    def on_slide(self, state, event, rng):
        self.require_phase(state, PLAYING)
        index = event.get('index')
        board = state['board']
        if not isinstance(index, int) or not 0 <= index < len(board):
            raise IllegalEvent('index out of range')
        if not can_slide(board, index):
            raise IllegalEvent('Tile is not next to the blank')
        blank = board.index(0)
        board[index], board[blank] = board[blank], board[index]
        state['moves'] += 1
        if board == GOAL:
            return [self.finish(state, solve_score(state['seconds'], state['moves']))]
        return []

    def on_tick(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['seconds'] += 1
        return []
