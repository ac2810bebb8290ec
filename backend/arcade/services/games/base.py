import copy
import enum
import random
from typing import Any, Dict, List, NamedTuple, Optional

from arcade.errors import IllegalEvent, ValidationError


class GameType(str, enum.Enum):
    SNAKE = 'snake'
    TRIVIA = 'trivia'
    TICTACTOE = 'tictactoe'
    MEMORY = 'memory'
    RPS = 'rps'
    FLAPPY = 'flappy'
    PUZZLE15 = 'puzzle15'
    SIMON = 'simon'
    SUDOKU = 'sudoku'
    CHESS = 'chess'
    GAME2048 = 'game2048'

    @classmethod
    def parse(cls, value) -> Optional['GameType']:
        try:
            return cls(value)
        except ValueError:
            return None


MENU = 'MENU'
PLAYING = 'PLAYING'
PAUSED = 'PAUSED'
SHOW = 'SHOW'
INPUT = 'INPUT'
QUESTION_RESULT = 'QUESTION_RESULT'
GAME_OVER = 'GAME_OVER'

DIFFICULTIES = ('easy', 'medium', 'hard')

State = Dict[str, Any]
Effect = Dict[str, Any]


class Transition(NamedTuple):
    state: State
    effects: List[Effect]


class GameKernel:
    """Pure state machine for one game type.

    States are JSON-compatible dicts so sessions can be persisted as-is.
    ``transition`` never mutates its input. Randomness comes from the
    session seed and the step counter, so replaying the same events from
    the same seed yields the same states.

    Subclasses implement ``new_game`` and one ``on_<event>`` handler per
    event type; handlers mutate the copied state and return effects.
    """

    game_type: GameType
    title = ''
    # Phases in which the scheduler should deliver ``tick`` events
    tick_phases: tuple = ()
    default_options: Dict[str, Any] = {}

    def initial_state(self, seed, options=None) -> State:
        opts = dict(self.default_options)
        opts.update(options or {})
        self.validate_options(opts)
        return {
            'game_type': self.game_type.value,
            'phase': MENU,
            'seed': str(seed),
            'step': 0,
            'score': 0,
            'options': opts,
        }

    def validate_options(self, options) -> None:
        difficulty = options.get('difficulty')
        if difficulty is not None and difficulty not in DIFFICULTIES:
            raise ValidationError(f'Unknown difficulty: {difficulty}')

    def transition(self, state: State, event: Dict[str, Any]) -> Transition:
        kind = (event or {}).get('type')
        handler = getattr(self, f'on_{kind}', None) if kind else None
        if handler is None:
            raise IllegalEvent(f'{self.game_type.value} does not handle event {kind!r}')
        new_state = copy.deepcopy(state)
        new_state['step'] = int(new_state.get('step', 0)) + 1
        rng = random.Random(f"{new_state['seed']}:{new_state['step']}")
        effects = handler(new_state, event, rng) or []
        return Transition(new_state, effects)

    # ---- shared handlers ----

    def on_start(self, state, event, rng):
        if state['phase'] not in (MENU, GAME_OVER):
            raise IllegalEvent('Game already in progress')
        state['score'] = 0
        self.new_game(state, rng)
        return [{'type': 'started'}]

    def new_game(self, state, rng) -> None:
        raise NotImplementedError

    # ---- helpers ----

    @staticmethod
    def require_phase(state, *phases):
        if state['phase'] not in phases:
            raise IllegalEvent(f"Event not allowed in phase {state['phase']}")

    def finish(self, state, score=None) -> Effect:
        if score is not None:
            state['score'] = score
        state['phase'] = GAME_OVER
        return {'type': 'game_over', 'score': self.final_score(state)}

    def final_score(self, state):
        return state.get('score', 0)

    def is_over(self, state) -> bool:
        return state.get('phase') == GAME_OVER

    def wants_tick(self, state) -> bool:
        return state.get('phase') in self.tick_phases
