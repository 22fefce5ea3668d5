from flask import current_app

from discgolf import db
from discgolf.errors import CourseNotFound, GameNotFound, GameNotStarted, InvalidInput
from discgolf.models import (
    Course,
    Game,
    Participation,
    Score,
    GAME_SINGLEPLAYER,
    hours_from_now,
)
from .registry import PlayerIdentity, get_room


def get_game(game_id) -> Game:
    game = db.session.get(Game, game_id)
    if game is None:
        raise GameNotFound(game_id)
    return game


def game_for_room(room_id) -> Game:
    room = get_room(room_id)
    if room.game is None:
        raise GameNotStarted()
    return room.game


def _as_int(value, field, minimum):
    if isinstance(value, bool):
        raise InvalidInput(f'{field} must be an integer')
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f'{field} must be an integer')
    if number < minimum:
        raise InvalidInput(f'{field} must be at least {minimum}')
    return number


def upsert_score(game: Game, identity: PlayerIdentity, hole_number, strokes, ob_count=0) -> Score:
    """Write the score for (game, hole, player), replacing any earlier row."""
    if not identity.user_id and not identity.player_name:
        raise InvalidInput('A user id or player name is required')
    hole_number = _as_int(hole_number, 'hole_number', 1)
    strokes = _as_int(strokes, 'strokes', 1)
    ob_count = _as_int(ob_count if ob_count is not None else 0, 'ob_count', 0)
    hole_numbers = {h.number for h in game.course.holes}
    if hole_numbers and hole_number not in hole_numbers:
        raise InvalidInput(f'Hole {hole_number} is not on this course')

    score = Score.query.filter_by(game_id=game.id, hole_number=hole_number, player_key=identity.key).first()
    if score is None:
        score = Score(
            game_id=game.id,
            hole_number=hole_number,
            player_key=identity.key,
            user_id=identity.user_id,
            player_name=identity.player_name,
        )
        action = 'insert'
    else:
        action = 'update'
    score.strokes = strokes
    score.ob_count = ob_count
    if identity.player_name:
        score.player_name = identity.player_name
    db.session.add(score)
    db.session.commit()
    current_app.logger.info(
        f"[score-{action}] game={game.id} hole={hole_number} player={identity.key} strokes={strokes} ob={ob_count}"
    )
    return score


def create_solo_game(course_id, player: PlayerIdentity) -> Game:
    """Start a one-player game; the player is ready from the outset."""
    if not course_id or not player.player_name:
        raise InvalidInput('course_id and player_name are required')
    course = db.session.get(Course, course_id)
    if course is None:
        raise CourseNotFound(course_id)

    game = Game(
        course_id=course.id,
        game_mode=GAME_SINGLEPLAYER,
        owner_id=player.user_id,
        owner_name=player.player_name,
        max_players=1,
        is_active=True,
        expires_at=hours_from_now(int(current_app.config.get('SOLO_GAME_TTL_HOURS', 3))),
    )
    game.participants.append(Participation(
        user_id=player.user_id,
        player_name=player.player_name,
        is_ready=True,
    ))
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[game-create] game={game.id} course={course.id} mode=singleplayer player={player.key}")
    return game
