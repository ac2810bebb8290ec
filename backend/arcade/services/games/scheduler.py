import time

from arcade import db, socketio
from arcade.errors import ArcadeError
from arcade.models import GameSession
from .registry import get_kernel


def _ticking(app) -> set:
    return app.extensions['arcade'].setdefault('ticking', set())


def tick_interval(app, game_type: str) -> float:
    intervals = app.config.get('TICK_INTERVALS_MS') or {}
    return max(1, int(intervals.get(game_type, 1000))) / 1000.0


def schedule_ticks(app, session_id: str) -> None:
    """Drive periodic ``tick`` events for a real-time session.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Ensures a single ticker per session
    - Stops once the kernel no longer wants ticks (paused, answering, over)
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    ticking = _ticking(app)
    if session_id in ticking:
        return
    ticking.add(session_id)

    with app.app_context():
        gs = db.session.get(GameSession, session_id)
        game_type = gs.game_type if gs else None
    if game_type is None:
        ticking.discard(session_id)
        return
    interval = tick_interval(app, game_type)
    try:
        app.logger.info(f"[tick-set] session={session_id} game={game_type} interval={interval}s")
    except Exception:
        pass

    def _worker(sid: str, delay: float):
        from .sessions import apply_event

        try:
            hb = int(app.config.get('TIMER_HEARTBEAT_SEC', 0))
        except Exception:
            hb = 0
        last_beat = time.time()
        ticks = 0
        try:
            while True:
                time.sleep(delay)
                with app.app_context():
                    gs = db.session.get(GameSession, sid)
                    if not gs or not get_kernel(gs.game_type).wants_tick(gs.state):
                        try:
                            app.logger.info(f"[tick-stop] session={sid} ticks={ticks}")
                        except Exception:
                            pass
                        return
                    try:
                        apply_event(app, sid, {'type': 'tick'}, schedule=False)
                    except ArcadeError as exc:
                        app.logger.warning(f"[tick-abort] session={sid} error={exc.message}")
                        return
                    ticks += 1
                if hb and time.time() - last_beat >= hb:
                    last_beat = time.time()
                    try:
                        app.logger.info(f"[timer-heartbeat] session={sid} ticks={ticks}")
                    except Exception:
                        pass
        finally:
            _ticking(app).discard(sid)

    if app.config.get('TESTING'):
        _worker(session_id, interval)
    else:
        socketio.start_background_task(_worker, session_id, interval)
