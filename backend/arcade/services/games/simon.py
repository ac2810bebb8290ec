from arcade.errors import IllegalEvent
from .base import INPUT, SHOW, GameKernel, GameType

PADS = ('red', 'green', 'blue', 'yellow')


class SimonSays(GameKernel):
    """Repeat a growing pad sequence.

    In SHOW the scheduler ticks once per lit pad (``active`` is the pad to
    light, or None once the sequence is done); the client may also send
    ``shown`` to skip straight to INPUT.
    """

    game_type = GameType.SIMON
    title = 'Simon Says'
    tick_phases = (SHOW,)

    def new_game(self, state, rng):
        state['sequence'] = [rng.randrange(len(PADS))]
        self._show(state)

    def _show(self, state):
        state['step_index'] = 0
        state['show_index'] = 0
        state['active'] = state['sequence'][0]
        state['phase'] = SHOW

    def on_tick(self, state, event, rng):
        self.require_phase(state, SHOW)
        state['show_index'] += 1
        if state['show_index'] >= len(state['sequence']):
            return self.on_shown(state, event, rng)
        state['active'] = state['sequence'][state['show_index']]
        return []

    def on_shown(self, state, event, rng):
        self.require_phase(state, SHOW)
        state['active'] = None
        state['phase'] = INPUT
        return []

    def on_press(self, state, event, rng):
        self.require_phase(state, INPUT)
        pad = event.get('pad')
        if not isinstance(pad, int) or not 0 <= pad < len(PADS):
            raise IllegalEvent('pad must be 0-3')
        sequence = state['sequence']
        if sequence[state['step_index']] != pad:
            return [self.finish(state)]

        state['step_index'] += 1
        if state['step_index'] < len(sequence):
            return []
        sequence.append(rng.randrange(len(PADS)))
        state['score'] = len(sequence)
        self._show(state)
        return [{'type': 'round_complete', 'length': len(sequence)}]
