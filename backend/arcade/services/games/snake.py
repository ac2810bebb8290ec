from arcade.errors import IllegalEvent
from .base import PAUSED, PLAYING, GameKernel, GameType

GRID_CELLS = 20
START = [10, 10]
FOOD_POINTS = 10

DIRECTIONS = {
    'UP': (0, -1),
    'DOWN': (0, 1),
    'LEFT': (-1, 0),
    'RIGHT': (1, 0),
}
OPPOSITE = {'UP': 'DOWN', 'DOWN': 'UP', 'LEFT': 'RIGHT', 'RIGHT': 'LEFT'}


def random_food(rng, snake):
    free = [
        [x, y]
        for x in range(GRID_CELLS)
        for y in range(GRID_CELLS)
        if [x, y] not in snake
    ]
    return rng.choice(free) if free else None


def hits_wall(head) -> bool:
    x, y = head
    return x < 0 or x >= GRID_CELLS or y < 0 or y >= GRID_CELLS


class Snake(GameKernel):
    game_type = GameType.SNAKE
    title = 'Snake Challenge'
    tick_phases = (PLAYING,)

    def new_game(self, state, rng):
        state['snake'] = [list(START)]
        state['direction'] = 'RIGHT'
        state['pending_direction'] = 'RIGHT'
        state['food'] = random_food(rng, state['snake'])
        state['phase'] = PLAYING

    def on_turn(self, state, event, rng):
        self.require_phase(state, PLAYING)
        direction = str(event.get('direction', '')).upper()
        if direction not in DIRECTIONS:
            raise IllegalEvent(f'Unknown direction: {direction}')
        # Reversing onto the neck is ignored, not an error
        if direction != OPPOSITE[state['direction']]:
            state['pending_direction'] = direction
        return []

    def on_pause(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['phase'] = PAUSED
        return []

    def on_resume(self, state, event, rng):
        self.require_phase(state, PAUSED)
        state['phase'] = PLAYING
        return []

    def on_tick(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['direction'] = state['pending_direction']
        dx, dy = DIRECTIONS[state['direction']]
        snake = state['snake']
        head = [snake[0][0] + dx, snake[0][1] + dy]

        if hits_wall(head) or head in snake:
            return [self.finish(state)]

        snake.insert(0, head)
        if head == state['food']:
            state['score'] += FOOD_POINTS
            state['food'] = random_food(rng, snake)
            effects = [{'type': 'scored', 'points': FOOD_POINTS}]
            if state['food'] is None:
                effects.append(self.finish(state))
            return effects
        snake.pop()
        return []
