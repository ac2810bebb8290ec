"""Persistent game sessions.

A session row stores the kernel state as JSON. Every event goes through
the kernel's pure ``transition``; the new state is committed and pushed to
the ``session:<id>`` room before the scheduler is asked to keep ticking.
"""

import uuid
from typing import List, Optional, Tuple

from sqlalchemy.orm.exc import StaleDataError

from arcade import db, socketio
from arcade.errors import IllegalEvent, PersistenceFailure, SessionNotFound, ValidationError
from arcade.models import GameSession
from arcade.services.rewards.issuance import enqueue_rewards
from arcade.services.stats.repository import PlayerStatsRepository
from .base import GameType
from .registry import get_kernel
from .scheduler import schedule_ticks


def _broadcast(gs: GameSession, effects=None) -> None:
    socketio.emit(
        'state_update',
        {'session_id': gs.id, 'state': gs.state, 'effects': effects or []},
        to=f"session:{gs.id}",
        namespace='/ws',
    )


def create_session(game_type, options=None, seed=None, player=None) -> GameSession:
    game = GameType.parse(game_type)
    if game is None:
        raise ValidationError(f'Unknown game type: {game_type}')
    if options is not None and not isinstance(options, dict):
        raise ValidationError('options must be an object')
    kernel = get_kernel(game)
    state = kernel.initial_state(seed if seed is not None else uuid.uuid4().hex, options)
    gs = GameSession(game_type=game.value, player=player)
    gs.state = state
    db.session.add(gs)
    db.session.commit()
    return gs


def load_session(session_id: str) -> GameSession:
    # Tick workers write sessions from their own app context
    gs = db.session.get(GameSession, session_id, populate_existing=True)
    if gs is None:
        raise SessionNotFound('Session not found')
    return gs


def apply_event(app, session_id: str, event, schedule: bool = True) -> Tuple[GameSession, List[dict]]:
    """Run one event through the session's kernel and commit the result.

    A tick worker and player inputs may race on the same session. The loser
    of the ``version`` compare-and-swap reloads the committed state and
    applies its event again, so no input is dropped.
    """
    if not isinstance(event, dict) or not event.get('type'):
        raise ValidationError('Event must be an object with a type')
    max_retries = int(app.config.get('SESSION_MAX_RETRIES', 5))
    for attempt in range(1, max_retries + 1):
        gs = load_session(session_id)
        if gs.submitted:
            raise IllegalEvent('Session already submitted')
        kernel = get_kernel(gs.game_type)
        state, effects = kernel.transition(gs.state, event)
        gs.state = state
        try:
            db.session.commit()
        except StaleDataError:
            db.session.rollback()
            try:
                app.logger.info(f"[session-retry] session={session_id} event={event['type']} attempt={attempt}")
            except Exception:
                pass
            continue
        _broadcast(gs, effects)
        if schedule and kernel.wants_tick(state):
            schedule_ticks(app, gs.id)
        return gs, effects
    raise PersistenceFailure('Too many concurrent updates for this session')


def final_score(gs: GameSession):
    return get_kernel(gs.game_type).final_score(gs.state)


def submit_session(app, session_id: str, address: Optional[str], display_name: Optional[str] = None):
    """Feed a finished session's final score to the stats repository.

    Returns the repository's ``SubmitResult`` and the queued reward attempts.
    """
    gs = load_session(session_id)
    kernel = get_kernel(gs.game_type)
    state = gs.state
    if gs.submitted:
        raise IllegalEvent('Score already submitted for this session')
    if not kernel.is_over(state):
        raise IllegalEvent('Game is not over yet')

    repo = PlayerStatsRepository.from_app(app)
    result = repo.submit_score(
        address,
        gs.game_type,
        kernel.final_score(state),
        display_name=display_name,
        difficulty=state.get('options', {}).get('difficulty'),
        game_session=gs,
    )
    attempts = enqueue_rewards(app, result)
    return result, attempts
