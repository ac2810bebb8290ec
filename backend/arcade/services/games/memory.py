from arcade.errors import IllegalEvent
from .base import PLAYING, GameKernel, GameType

SYMBOLS = ['apple', 'banana', 'grapes', 'strawberry', 'cherries', 'pineapple',
           'kiwi', 'watermelon', 'peach', 'avocado', 'lemon', 'pear']
GRID_SIZE = 16
PAIRS = GRID_SIZE // 2
MATCH_POINTS = 10
MISS_PENALTY = 1


class MemoryMatch(GameKernel):
    """Flip two cards per move; a mismatch stays face up until the next flip."""

    game_type = GameType.MEMORY
    title = 'Memory Match'
    tick_phases = (PLAYING,)

    def new_game(self, state, rng):
        deck = SYMBOLS[:PAIRS] * 2
        rng.shuffle(deck)
        state['cards'] = [{'id': i, 'symbol': s, 'matched': False} for i, s in enumerate(deck)]
        state['flipped'] = []
        state['moves'] = 0
        state['seconds'] = 0
        state['phase'] = PLAYING

    def on_flip(self, state, event, rng):
        self.require_phase(state, PLAYING)
        index = event.get('index')
        cards = state['cards']
        if not isinstance(index, int) or not 0 <= index < len(cards):
            raise IllegalEvent('index out of range')
        if cards[index]['matched']:
            raise IllegalEvent('Card already matched')

        # A resolved mismatch is still face up; the next flip hides it
        if len(state['flipped']) == 2:
            state['flipped'] = []
        if index in state['flipped']:
            raise IllegalEvent('Card already flipped')
        state['flipped'].append(index)
        if len(state['flipped']) < 2:
            return []
        return self._resolve(state)

    def on_tick(self, state, event, rng):
        self.require_phase(state, PLAYING)
        state['seconds'] += 1
        return []

    def _resolve(self, state):
        i, j = state['flipped']
        a, b = state['cards'][i], state['cards'][j]
        state['moves'] += 1
        if a['symbol'] != b['symbol']:
            state['score'] = max(0, state['score'] - MISS_PENALTY)
            return [{'type': 'mismatch', 'cards': [i, j]}]

        a['matched'] = b['matched'] = True
        state['flipped'] = []
        state['score'] += MATCH_POINTS
        effects = [{'type': 'scored', 'points': MATCH_POINTS}]
        if all(card['matched'] for card in state['cards']):
            time_penalty = state['seconds'] // 10
            effects.append(self.finish(state, max(0, state['score'] - time_penalty)))
        return effects
