from flask_socketio import join_room, leave_room, emit
from discgolf import socketio

NAMESPACE = '/ws'


def channel_for(room_id) -> str:
    return f"room:{room_id}"


def emit_room_update(room_id, game_id=None) -> None:
    """Tell every client watching the room to refetch its state."""
    payload = {'room_id': room_id}
    if game_id is not None:
        payload['game_id'] = game_id
    socketio.emit('state_update', payload, to=channel_for(room_id), namespace=NAMESPACE)


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def _room_id_from(data):
    room_id = (data or {}).get('room_id')
    if room_id is None or str(room_id).strip() == '':
        emit('error', {'message': 'room_id is required'})
        return None
    return str(room_id).strip()


def handle_join_room(data):
    room_id = _room_id_from(data)
    if room_id is None:
        return
    channel = channel_for(room_id)
    join_room(channel)
    emit('joined', {'room': channel})


def handle_leave_room(data):
    room_id = _room_id_from(data)
    if room_id is None:
        return
    channel = channel_for(room_id)
    leave_room(channel)
    emit('left', {'room': channel})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [NAMESPACE, '/'] if testing else [NAMESPACE]
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_room', handle_join_room, namespace=namespace)
        socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
