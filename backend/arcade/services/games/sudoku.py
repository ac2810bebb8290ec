from arcade.errors import IllegalEvent, ValidationError
from .base import PLAYING, GameKernel, GameType

PUZZLES = [
    [0, 0, 0, 2, 6, 0, 7, 0, 1,
     6, 8, 0, 0, 7, 0, 0, 9, 0,
     1, 9, 0, 0, 0, 4, 5, 0, 0,
     8, 2, 0, 1, 0, 0, 0, 4, 0,
     0, 0, 4, 6, 0, 2, 9, 0, 0,
     0, 5, 0, 0, 0, 3, 0, 2, 8,
     0, 0, 9, 3, 0, 0, 0, 7, 4,
     0, 4, 0, 0, 5, 0, 0, 3, 6,
     7, 0, 3, 0, 1, 8, 0, 0, 0],
]

BASE_POINTS = 500


def to_grid(numbers):
    return [
        [{'value': n, 'fixed': n != 0} for n in numbers[r * 9:(r + 1) * 9]]
        for r in range(9)
    ]


def is_valid(grid, row, col, value) -> bool:
    """True if ``value`` does not already appear in the row, column or box."""
    for i in range(9):
        if i != col and grid[row][i]['value'] == value:
            return False
        if i != row and grid[i][col]['value'] == value:
            return False
    br, bc = (row // 3) * 3, (col // 3) * 3
    for r in range(br, br + 3):
        for c in range(bc, bc + 3):
            if (r, c) != (row, col) and grid[r][c]['value'] == value:
                return False
    return True


def is_complete(grid) -> bool:
    return all(cell['value'] != 0 for row in grid for cell in row)


class Sudoku(GameKernel):
    game_type = GameType.SUDOKU
    title = 'Sudoku'
    tick_phases = (PLAYING,)
    default_options = {'puzzle': 0}

    def validate_options(self, options):
        super().validate_options(options)
        if options.get('puzzle') not in range(len(PUZZLES)):
            raise ValidationError('Unknown puzzle')

    def new_game(self, state, rng):
        state['grid'] = to_grid(PUZZLES[state['options']['puzzle']])
        state['seconds'] = 0
        state['phase'] = PLAYING

    def _cell(self, state, event):
        row, col = event.get('row'), event.get('col')
        if not all(isinstance(v, int) and 0 <= v < 9 for v in (row, col)):
            raise IllegalEvent('row and col must be 0-8')
        cell = state['grid'][row][col]
        if cell['fixed']:
            raise IllegalEvent('Cell is part of the puzzle')
        return row, col, cell

    def on_place(self, state, event, rng):
        self.require_phase(state, PLAYING)
        row, col, cell = self._cell(state, event)
        value = event.get('value')
        if not isinstance(value, int) or not 1 <= value <= 9:
            raise IllegalEvent('value must be 1-9')
        if not is_valid(state['grid'], row, col, value):
            raise IllegalEvent('Value conflicts with row, column or box')
        cell['value'] = value
        if is_complete(state['grid']):
            return [self.finish(state, max(0, BASE_POINTS - state['seconds']))]
        return []

    def on_clear(self, state, event, rng):
        self.require_phase(state, PLAYING)
        _, _, cell = self._cell(state, event)
        cell['value'] = 0
        return []

    def on_tick(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['seconds'] += 1
        return []
