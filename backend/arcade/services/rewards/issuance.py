import time
from typing import List, Optional

from arcade import db, socketio
from arcade.errors import ArcadeError, IllegalEvent, NotFound
from arcade.models import RewardAttempt
from .catalog import badge_metadata


def create_attempts(result) -> List[RewardAttempt]:
    """Reward attempts for a committed submission.

    One ``token`` attempt when tokens were earned and one ``badge`` attempt
    when the badge is new to the player.
    """
    attempts = []
    if result.reward.tokens > 0:
        attempts.append(RewardAttempt(
            player=result.player, score_event_id=result.event.id, kind='token', amount=result.reward.tokens,
        ))
    if result.new_badge:
        attempts.append(RewardAttempt(
            player=result.player, score_event_id=result.event.id, kind='badge', badge=result.new_badge,
        ))
    for attempt in attempts:
        db.session.add(attempt)
    if attempts:
        db.session.commit()
    return attempts


def enqueue_rewards(app, result) -> List[RewardAttempt]:
    attempts = create_attempts(result)
    ids = [a.id for a in attempts]
    for attempt_id in ids:
        schedule_reward_issuance(app, attempt_id)
    # The worker commits from its own app context
    return [db.session.get(RewardAttempt, i, populate_existing=True) for i in ids]


def retry_attempt(app, attempt_id: int) -> RewardAttempt:
    attempt = db.session.get(RewardAttempt, attempt_id)
    if attempt is None:
        raise NotFound('Reward attempt not found')
    if attempt.status != 'failed':
        raise IllegalEvent('Only failed reward attempts can be retried')
    attempt.status = 'pending'
    attempt.last_error = None
    db.session.commit()
    schedule_reward_issuance(app, attempt_id)
    return db.session.get(RewardAttempt, attempt_id, populate_existing=True)


def _ledger_call(ledger, attempt: RewardAttempt, timeout: float):
    address = attempt.player.address
    if attempt.kind == 'token':
        game = attempt.score_event.game_type if attempt.score_event else 'arcade'
        return ledger.transfer(address, attempt.amount or 0, f"{game} reward", timeout)
    return ledger.mint(address, badge_metadata(attempt.badge), timeout)


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ArcadeError):
        return exc.message
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__


def _broadcast(attempt: RewardAttempt) -> None:
    socketio.emit('reward_update', attempt.to_dict(), to=f"wallet:{attempt.player.address}", namespace='/ws')


def schedule_reward_issuance(app, attempt_id: int) -> None:
    """Issue one reward attempt against the ledger.

    - Runs inline in TESTING mode, on a background task otherwise
    - Retries failed calls with exponential backoff up to REWARD_MAX_ATTEMPTS
    - Marks the attempt confirmed (with tx id) or failed (with the error)
    - Never touches player stats; a failed reward is retried on its own
    """
    max_attempts = max(1, int(app.config.get('REWARD_MAX_ATTEMPTS', 3)))
    timeout = float(app.config.get('REWARD_TIMEOUT_SEC', 15))
    backoff = float(app.config.get('REWARD_BACKOFF_SEC', 1))

    def _worker(aid: int):
        with app.app_context():
            attempt: Optional[RewardAttempt] = db.session.get(RewardAttempt, aid)
            if not attempt or attempt.status != 'pending':
                return
            try:
                _issue(attempt)
            except Exception as exc:
                # An attempt never stays pending once its worker exits
                db.session.rollback()
                attempt = db.session.get(RewardAttempt, aid, populate_existing=True)
                attempt.status = 'failed'
                attempt.last_error = _error_message(exc)
                db.session.commit()
                app.logger.exception(f"[reward-error] attempt={aid}")
                _broadcast(attempt)

    def _issue(attempt: RewardAttempt):
        aid = attempt.id
        ledger = app.extensions['arcade']['ledger']

        if attempt.kind == 'badge' and badge_metadata(attempt.badge) is None:
            attempt.attempts += 1
            attempt.status = 'failed'
            attempt.last_error = 'Badge template not found'
            db.session.commit()
            try:
                app.logger.info(f"[reward-fail] attempt={aid} kind=badge badge={attempt.badge} no template")
            except Exception:
                pass
            _broadcast(attempt)
            return

        for n in range(1, max_attempts + 1):
            attempt.attempts += 1
            try:
                app.logger.info(f"[reward-attempt] attempt={aid} kind={attempt.kind} try={n}/{max_attempts}")
            except Exception:
                pass
            try:
                tx = _ledger_call(ledger, attempt, timeout)
            except Exception as exc:
                # Any ledger error counts as a failed try
                attempt.last_error = _error_message(exc)
                db.session.commit()
                try:
                    app.logger.info(f"[reward-fail] attempt={aid} try={n} error={attempt.last_error}")
                except Exception:
                    pass
                if n < max_attempts and backoff > 0:
                    time.sleep(backoff * 2 ** (n - 1))
                continue
            attempt.status = 'confirmed'
            attempt.tx_id = tx.tx_id
            attempt.asset_id = tx.asset_id
            attempt.last_error = None
            db.session.commit()
            try:
                app.logger.info(f"[reward-confirmed] attempt={aid} tx={tx.tx_id}")
            except Exception:
                pass
            _broadcast(attempt)
            return

        attempt.status = 'failed'
        db.session.commit()
        _broadcast(attempt)

    if app.config.get('TESTING'):
        _worker(attempt_id)
    else:
        socketio.start_background_task(_worker, attempt_id)
