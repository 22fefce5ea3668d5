from flask import Blueprint, jsonify, request

from discgolf.api import identity_from_request
from discgolf.services.rooms import ledger
from discgolf.services.rooms.results import game_results
from discgolf.socketio_events import emit_room_update


games = Blueprint('games', __name__)


@games.route('', methods=['POST'])
def create_solo_game():
    """Start a singleplayer game on a course."""
    data = request.get_json(silent=True) or {}
    game = ledger.create_solo_game(data.get('course_id'), identity_from_request(data))
    return jsonify({
        'game_id': game.id,
        'game': game.to_dict(include_scores=False),
        'course': game.course.to_dict(),
    }), 201


@games.route('/<int:game_id>', methods=['GET'])
def get_game(game_id):
    game = ledger.get_game(game_id)
    payload = game.to_dict()
    payload['course'] = game.course.to_dict()
    return jsonify(payload)


@games.route('/<int:game_id>/scores', methods=['GET'])
def list_scores(game_id):
    game = ledger.get_game(game_id)
    return jsonify(game.to_dict()['scores'])


@games.route('/<int:game_id>/scores', methods=['POST'])
def submit_score(game_id):
    data = request.get_json(silent=True) or {}
    game = ledger.get_game(game_id)
    score = ledger.upsert_score(
        game,
        identity_from_request(data),
        data.get('hole_number'),
        data.get('strokes'),
        data.get('ob_count', 0),
    )
    if game.room_id:
        emit_room_update(game.room_id, game.id)
    return jsonify(score.to_dict())


@games.route('/<int:game_id>/results', methods=['GET'])
def results(game_id):
    return jsonify(game_results(ledger.get_game(game_id)))
