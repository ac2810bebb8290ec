from arcade.errors import IllegalEvent
from .base import PLAYING, GameKernel, GameType

SIZE = 4
FOUR_CHANCE = 0.1


def empty_grid():
    return [[0] * SIZE for _ in range(SIZE)]


def add_random(grid, rng):
    empty = [(r, c) for r in range(SIZE) for c in range(SIZE) if not grid[r][c]]
    if not empty:
        return grid
    r, c = rng.choice(empty)
    grid[r][c] = 4 if rng.random() < FOUR_CHANCE else 2
    return grid


def rotate(grid):
    """Quarter turn clockwise."""
    out = empty_grid()
    for r in range(SIZE):
        for c in range(SIZE):
            out[c][SIZE - 1 - r] = grid[r][c]
    return out


def slide_left(row):
    tiles = [v for v in row if v]
    merged = []
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged.append(tiles[i] * 2)
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    return merged + [0] * (SIZE - len(merged))


# Clockwise quarter turns that bring each direction to "left", and back
TURNS = {'left': (0, 0), 'up': (3, 1), 'right': (2, 2), 'down': (1, 3)}


def shift(grid, direction):
    before, after = TURNS[direction]
    g = [row[:] for row in grid]
    for _ in range(before):
        g = rotate(g)
    g = [slide_left(row) for row in g]
    for _ in range(after):
        g = rotate(g)
    return g


def can_move(grid) -> bool:
    return any(shift(grid, d) != grid for d in TURNS)


def tile_sum(grid) -> int:
    return sum(v for row in grid for v in row)


def max_tile(grid) -> int:
    return max(v for row in grid for v in row)


class Game2048(GameKernel):
    """Running score is the tile sum; the score submitted is the best tile."""

    game_type = GameType.GAME2048
    title = '2048'

    def new_game(self, state, rng):
        state['grid'] = add_random(add_random(empty_grid(), rng), rng)
        state['score'] = tile_sum(state['grid'])
        state['phase'] = PLAYING

    def on_move(self, state, event, rng):
        self.require_phase(state, PLAYING)
        direction = event.get('direction')
        if direction not in TURNS:
            raise IllegalEvent('direction must be left, right, up or down')
        moved = shift(state['grid'], direction)
        if moved == state['grid']:
            return []
        state['grid'] = add_random(moved, rng)
        state['score'] = tile_sum(state['grid'])
        if not can_move(state['grid']):
            return [self.finish(state)]
        return []

    def on_end(self, state, event, rng):
        self.require_phase(state, PLAYING)
        return [self.finish(state)]

    def final_score(self, state):
        if 'grid' not in state:
            return 0
        return max_tile(state['grid'])
