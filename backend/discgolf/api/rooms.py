from flask import Blueprint, jsonify, request

from discgolf.api import identity_from_request
from discgolf.errors import InvalidInput
from discgolf.services.rooms import ledger, registry
from discgolf.services.rooms.results import room_results
from discgolf.socketio_events import emit_room_update


rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
def list_rooms():
    """Active rooms that have not expired."""
    return jsonify([room.to_dict() for room in registry.list_open_rooms()])


@rooms.route('', methods=['POST'])
def create_room():
    data = request.get_json(silent=True) or {}
    owner = identity_from_request({'player_name': data.get('owner_name') or data.get('player_name')})
    room = registry.create_room(
        name=data.get('name'),
        course_id=data.get('course_id'),
        owner=owner,
        max_players=data.get('max_players'),
        password=data.get('password'),
    )
    return jsonify(room.to_dict()), 201


@rooms.route('/join', methods=['POST'])
def join_room():
    data = request.get_json(silent=True) or {}
    room_id = data.get('room_id')
    try:
        room_id = int(room_id) if room_id is not None else None
    except (TypeError, ValueError):
        raise InvalidInput('room_id must be an integer')
    participation = registry.join_room(room_id, identity_from_request(data), data.get('password'))
    emit_room_update(participation.room_id)
    return jsonify({'success': True, 'participation': participation.to_dict()}), 201


@rooms.route('/<int:room_id>', methods=['GET'])
def get_room(room_id):
    return jsonify(registry.get_room(room_id).to_dict())


@rooms.route('/<int:room_id>/ready', methods=['POST'])
def ready(room_id):
    """Mark a participant ready; the room starts once everybody is."""
    data = request.get_json(silent=True) or {}
    participant_id = data.get('participant_id')
    identity = None
    if participant_id is not None:
        try:
            participant_id = int(participant_id)
        except (TypeError, ValueError):
            raise InvalidInput('participant_id must be an integer')
    else:
        identity = identity_from_request(data)
        if not identity.user_id and not identity.player_name:
            raise InvalidInput('participant_id or player_name is required')
    room = registry.mark_ready(room_id, identity=identity, participant_id=participant_id)
    emit_room_update(room.id, room.game_id)
    return jsonify(room.to_dict(include_course=False))


@rooms.route('/<int:room_id>/scores', methods=['POST'])
def submit_score(room_id):
    data = request.get_json(silent=True) or {}
    game = ledger.game_for_room(room_id)
    score = ledger.upsert_score(
        game,
        identity_from_request(data),
        data.get('hole_number'),
        data.get('strokes'),
        data.get('ob_count', 0),
    )
    emit_room_update(room_id, game.id)
    return jsonify(score.to_dict())


@rooms.route('/<int:room_id>/complete', methods=['POST'])
def complete(room_id):
    room = registry.complete_room(room_id)
    emit_room_update(room.id, room.game_id)
    return jsonify({'success': True, 'room': room.to_dict(include_course=False)})


@rooms.route('/<int:room_id>/results', methods=['GET'])
def results(room_id):
    return jsonify(room_results(registry.get_room(room_id)))
