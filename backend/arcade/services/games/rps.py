from arcade.errors import IllegalEvent
from .base import PLAYING, GameKernel, GameType

CHOICES = ('rock', 'paper', 'scissors')
BEATS = {'rock': 'scissors', 'paper': 'rock', 'scissors': 'paper'}
COUNTER = {loser: winner for winner, loser in BEATS.items()}

WIN_POINTS = {'easy': 1, 'medium': 2, 'hard': 3}
# easy: chance to throw what loses to the player; hard: chance to counter it
EASY_GIFT_RATE = 0.1
HARD_COUNTER_RATE = 0.35


def ai_pick(difficulty, player_choice, rng):
    roll = rng.random()
    if difficulty == 'easy' and player_choice and roll < EASY_GIFT_RATE:
        return BEATS[player_choice]
    if difficulty == 'hard' and player_choice and roll < HARD_COUNTER_RATE:
        return COUNTER[player_choice]
    return rng.choice(CHOICES)


def outcome(player, enemy) -> str:
    if player == enemy:
        return 'draw'
    return 'win' if BEATS[player] == enemy else 'lose'


class RockPaperScissors(GameKernel):
    game_type = GameType.RPS
    title = 'Rock Paper Scissors'
    default_options = {'difficulty': 'medium'}

    def new_game(self, state, rng):
        state['rounds'] = 0
        state['streak'] = 0
        state['player_choice'] = None
        state['ai_choice'] = None
        state['result'] = None
        state['phase'] = PLAYING

    def on_throw(self, state, event, rng):
        self.require_phase(state, PLAYING)
        choice = event.get('choice')
        if choice not in CHOICES:
            raise IllegalEvent(f'choice must be one of {", ".join(CHOICES)}')
        # Biases apply against the throw being played
        enemy = ai_pick(state['options']['difficulty'], choice, rng)
        result = outcome(choice, enemy)
        state['player_choice'] = choice
        state['ai_choice'] = enemy
        state['result'] = result
        state['rounds'] += 1
        if result == 'win':
            points = WIN_POINTS[state['options']['difficulty']]
            state['score'] += points
            state['streak'] += 1
            return [{'type': 'round', 'result': result, 'points': points}]
        if result == 'lose':
            state['streak'] = 0
        return [{'type': 'round', 'result': result, 'points': 0}]

    def on_finish(self, state, event, rng):
        self.require_phase(state, PLAYING)
        return [self.finish(state)]
