from flask_socketio import join_room, leave_room, emit
from arcade import socketio, db
from arcade.models import GameSession


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    gs = db.session.get(GameSession, session_id, populate_existing=True)
    if gs is None:
        emit('error', {'message': 'Session not found'})
        return
    room = f"session:{session_id}"
    join_room(room)
    emit('joined', {'room': room})
    # Late joiners get the current state straight away
    emit('state_update', {'session_id': gs.id, 'state': gs.state, 'effects': []})


def handle_leave_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    room = f"session:{session_id}"
    leave_room(room)
    emit('left', {'room': room})


def handle_join_wallet(data):
    address = (data or {}).get('address')
    if not address:
        emit('error', {'message': 'address is required'})
        return
    room = f"wallet:{address}"
    join_room(room)
    emit('joined', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'join_session': handle_join_session,
        'leave_session': handle_leave_session,
        'join_wallet': handle_join_wallet,
        'ping': handle_ping,
    }
    for name, handler in handlers.items():
        socketio.on_event(name, handler, namespace='/ws')
        if testing:
            socketio.on_event(name, handler, namespace='/')
