from .base import PLAYING, GameKernel, GameType

WIDTH = 400
HEIGHT = 600
GRAVITY = 0.5
FLAP_VELOCITY = -7.5
SPEED = 2.5
GAP = 140
PIPE_WIDTH = 60
PIPE_SPACING = 200
BIRD_X = WIDTH / 4


def new_pipe(x, rng):
    return {'x': x, 'gap_y': 200 + rng.random() * 150 - 75, 'passed': False}


def collides(bird_y, pipes) -> bool:
    if bird_y < 0 or bird_y > HEIGHT:
        return True
    for pipe in pipes:
        if pipe['x'] < BIRD_X < pipe['x'] + PIPE_WIDTH:
            if bird_y < pipe['gap_y'] - GAP / 2 or bird_y > pipe['gap_y'] + GAP / 2:
                return True
    return False


class FlappyBird(GameKernel):
    game_type = GameType.FLAPPY
    title = 'Flappy Bird'
    tick_phases = (PLAYING,)

    def new_game(self, state, rng):
        state['bird_y'] = HEIGHT / 2
        state['velocity'] = 0.0
        first = WIDTH + PIPE_SPACING
        state['pipes'] = [new_pipe(first + i * PIPE_SPACING, rng) for i in range(3)]
        state['phase'] = PLAYING

    def on_flap(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['velocity'] = FLAP_VELOCITY
        return []

    def on_tick(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['velocity'] += GRAVITY
        state['bird_y'] += state['velocity']

        pipes = state['pipes']
        for pipe in pipes:
            pipe['x'] -= SPEED
        if pipes and pipes[0]['x'] + PIPE_WIDTH < 0:
            pipes.pop(0)
            last_x = pipes[-1]['x'] if pipes else WIDTH
            pipes.append(new_pipe(last_x + PIPE_SPACING, rng))

        effects = []
        for pipe in pipes:
            if not pipe['passed'] and pipe['x'] + PIPE_WIDTH < BIRD_X:
                pipe['passed'] = True
                state['score'] += 1
                effects.append({'type': 'scored', 'points': 1})

        if collides(state['bird_y'], pipes):
            effects.append(self.finish(state))
        return effects
