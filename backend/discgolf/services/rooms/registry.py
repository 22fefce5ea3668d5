from collections import namedtuple

from flask import current_app

from discgolf import db
from discgolf.errors import (
    AlreadyJoined,
    CourseNotFound,
    InvalidInput,
    ParticipantNotFound,
    PasswordRequired,
    RoomCompleted,
    RoomFull,
    RoomNotFound,
    RoomNotJoinable,
    WrongPassword,
)
from discgolf.models import (
    Course,
    Game,
    Participation,
    Room,
    GAME_MULTIPLAYER,
    ROOM_COMPLETED,
    ROOM_IN_PROGRESS,
    ROOM_WAITING,
    hours_from_now,
    player_key_for,
    utcnow,
)


class PlayerIdentity(namedtuple('PlayerIdentity', ['user_id', 'player_name'])):
    """A registered user (user_id set) or a guest known only by name."""

    @property
    def key(self):
        return player_key_for(self.user_id, self.player_name)


def get_room(room_id) -> Room:
    room = db.session.get(Room, room_id)
    if room is None:
        raise RoomNotFound(room_id)
    return room


def list_open_rooms():
    """Active rooms whose expiry has not passed, newest first."""
    return (Room.query
            .filter(Room.is_active.is_(True), Room.expires_at > utcnow())
            .order_by(Room.created_at.desc(), Room.id.desc())
            .all())


def create_room(name, course_id, owner: PlayerIdentity, max_players, password=None) -> Room:
    """Create a waiting room with its owner as the first, not-ready participant."""
    cfg = current_app.config
    min_players = int(cfg.get('MIN_ROOM_PLAYERS', 2))
    max_allowed = int(cfg.get('MAX_ROOM_PLAYERS', 20))
    if not name or not course_id or not owner.player_name:
        raise InvalidInput('Room name, course and owner name are required')
    if not isinstance(name, str):
        raise InvalidInput('Room name must be a string')
    if password is not None and not isinstance(password, str):
        raise InvalidInput('password must be a string')
    if isinstance(course_id, bool) or not isinstance(course_id, (int, str)):
        raise InvalidInput('course_id must be an integer')
    try:
        course_id = int(course_id)
    except ValueError:
        raise InvalidInput('course_id must be an integer')
    try:
        max_players = int(max_players)
    except (TypeError, ValueError):
        raise InvalidInput('max_players must be an integer')
    if not min_players <= max_players <= max_allowed:
        raise InvalidInput(f'Number of players must be between {min_players} and {max_allowed}')

    course = db.session.get(Course, course_id)
    if course is None:
        raise CourseNotFound(course_id)

    room = Room(
        name=name,
        course_id=course.id,
        owner_id=owner.user_id,
        owner_name=owner.player_name,
        max_players=max_players,
        status=ROOM_WAITING,
        is_active=True,
        expires_at=hours_from_now(int(cfg.get('ROOM_TTL_HOURS', 6))),
    )
    room.set_password(password, int(cfg.get('BCRYPT_LOG_ROUNDS', 12)))
    room.participants.append(Participation(
        user_id=owner.user_id,
        player_name=owner.player_name,
        is_ready=False,
    ))
    db.session.add(room)
    db.session.commit()
    current_app.logger.info(
        f"[room-create] room={room.id} course={course.id} owner={owner.key} max_players={max_players}"
    )
    return room


def find_participant(room: Room, identity: PlayerIdentity = None, participant_id=None):
    for p in room.participants:
        if participant_id is not None and p.id == participant_id:
            return p
        if identity is not None and p.player_key == identity.key:
            return p
    return None


def join_room(room_id, identity: PlayerIdentity, password=None) -> Participation:
    """Admit a player to a waiting room.

    Checks run in order: room exists, room is joinable, password, capacity,
    duplicate membership. A failed check never creates a participation row.
    """
    if not room_id or not identity.player_name:
        raise InvalidInput('Room id and player name are required')
    if password is not None and not isinstance(password, str):
        raise InvalidInput('password must be a string')
    room = get_room(room_id)

    if not room.is_active or room.is_expired or room.status != ROOM_WAITING:
        raise RoomNotJoinable()

    if room.password_hash:
        if not password:
            current_app.logger.info(f"[room-join] room={room.id} player={identity.key} rejected: no password")
            raise PasswordRequired()
        if not room.check_password(password):
            current_app.logger.info(f"[room-join] room={room.id} player={identity.key} rejected: wrong password")
            raise WrongPassword()

    if len(room.participants) >= room.max_players:
        raise RoomFull()

    if find_participant(room, identity) is not None:
        raise AlreadyJoined()

    participation = Participation(
        room_id=room.id,
        user_id=identity.user_id,
        player_name=identity.player_name,
        is_ready=False,
    )
    db.session.add(participation)
    db.session.commit()
    current_app.logger.info(
        f"[room-join] room={room.id} player={identity.key} count={len(room.participants)}/{room.max_players}"
    )
    return participation


def mark_ready(room_id, identity: PlayerIdentity = None, participant_id=None) -> Room:
    """Mark a participant ready and promote the room once everyone is."""
    room = get_room(room_id)
    if room.status == ROOM_COMPLETED:
        raise RoomCompleted()

    participant = find_participant(room, identity, participant_id)
    if participant is None:
        raise ParticipantNotFound()

    participant.is_ready = True
    db.session.add(participant)
    db.session.commit()

    ready, total = room.ready_count, len(room.participants)
    current_app.logger.info(f"[room-ready] room={room.id} player={participant.player_key} ready={ready}/{total}")
    if room.status == ROOM_WAITING and total > 0 and ready == total:
        _promote(room)
    return room


def _promote(room: Room) -> Game:
    game = Game(
        course_id=room.course_id,
        room_id=room.id,
        game_mode=GAME_MULTIPLAYER,
        owner_id=room.owner_id,
        owner_name=room.owner_name,
        max_players=room.max_players,
        is_active=True,
        expires_at=room.expires_at,
    )
    db.session.add(game)
    db.session.flush()
    for p in room.participants:
        p.game_id = game.id
        db.session.add(p)
    room.game_id = game.id
    room.status = ROOM_IN_PROGRESS
    db.session.add(room)
    db.session.commit()
    current_app.logger.info(f"[room-start] room={room.id} game={game.id} players={len(room.participants)}")
    return game


def complete_room(room_id) -> Room:
    """Close a room and its game. Safe to call repeatedly."""
    room = get_room(room_id)
    room.status = ROOM_COMPLETED
    room.is_active = False
    db.session.add(room)
    if room.game is not None:
        room.game.is_active = False
        db.session.add(room.game)
    db.session.commit()
    current_app.logger.info(f"[room-complete] room={room.id} game={room.game_id}")
    return room
