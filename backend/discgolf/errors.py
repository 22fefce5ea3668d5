"""Domain exceptions for the room/game flow.

Services raise these; the handlers registered here turn them into
``{"error": message}`` JSON responses with the matching status code.
"""
from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from discgolf import db


class RoomError(Exception):
    """Base class for every room/game error."""
    status_code = 400

    def __init__(self, message=None):
        super().__init__(message or self.__doc__)
        self.message = message or self.__doc__


class InvalidInput(RoomError):
    """Malformed or missing input"""
    status_code = 400


class NotFound(RoomError):
    """Not found"""
    status_code = 404


class RoomNotFound(NotFound):
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f'Room {room_id} not found')


class GameNotFound(NotFound):
    def __init__(self, game_id):
        self.game_id = game_id
        super().__init__(f'Game {game_id} not found')


class CourseNotFound(NotFound):
    def __init__(self, course_id):
        self.course_id = course_id
        super().__init__(f'Course {course_id} not found')


class ParticipantNotFound(NotFound):
    """You are not a participant in this room"""


class GameNotStarted(NotFound):
    """The game for this room has not started"""


class WrongPassword(RoomError):
    """Wrong room password"""
    status_code = 401


class PasswordRequired(WrongPassword):
    """Password required"""


class RoomNotJoinable(RoomError):
    """This room is not accepting players"""
    status_code = 403


class RoomFull(RoomError):
    """Room is full"""
    status_code = 400


class AlreadyJoined(RoomError):
    """You are already in this room"""
    status_code = 400


class RoomCompleted(RoomError):
    """Room is already completed"""
    status_code = 400


def register_error_handlers(flask_app):
    @flask_app.errorhandler(RoomError)
    def handle_room_error(exc):
        return jsonify({'error': exc.message}), exc.status_code

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc):
        db.session.rollback()
        current_app.logger.exception(f"[store-error] {exc.__class__.__name__}")
        return jsonify({'error': 'Unexpected database error'}), 500

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code
