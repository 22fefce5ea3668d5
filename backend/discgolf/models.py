from datetime import datetime, timedelta, timezone

from discgolf import db, bcrypt
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash


ROOM_WAITING = 'waiting'
ROOM_IN_PROGRESS = 'in_progress'
ROOM_COMPLETED = 'completed'

GAME_MULTIPLAYER = 'multiplayer'
GAME_SINGLEPLAYER = 'singleplayer'

DEFAULT_PAR = 3


def utcnow():
    """Naive UTC; every DateTime column stores this form."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hours_from_now(hours):
    return utcnow() + timedelta(hours=hours)


def player_key_for(user_id=None, player_name=None):
    """Identity used by the score ledger: registered users by id, guests by name."""
    if user_id:
        return f'user:{user_id}'
    return f'guest:{player_name}'


def _iso(value):
    return value.isoformat() if value else None


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Course(db.Model):
    __tablename__ = 'course'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    location = db.Column(db.String(128), nullable=True)
    par = db.Column(db.Integer, default=DEFAULT_PAR, nullable=False)
    holes = db.relationship('Hole', back_populates='course', order_by='Hole.number',
                            cascade='all, delete-orphan')

    @property
    def total_holes(self):
        return len(self.holes)

    def to_dict(self, include_holes=True):
        data = {
            'id': self.id,
            'name': self.name,
            'location': self.location,
            'par': self.par,
            'total_holes': self.total_holes,
        }
        if include_holes:
            data['holes'] = [h.to_dict() for h in self.holes]
        return data


class Hole(db.Model):
    __tablename__ = 'hole'
    __table_args__ = (db.UniqueConstraint('course_id', 'number', name='hole_number_unique'),)
    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    number = db.Column(db.Integer, nullable=False)
    par = db.Column(db.Integer, default=DEFAULT_PAR, nullable=False)
    distance = db.Column(db.Integer, default=0)  # metres
    course = db.relationship('Course', back_populates='holes')

    def to_dict(self):
        return {
            'number': self.number,
            'par': self.par,
            'distance': self.distance,
        }


class Room(db.Model):
    __tablename__ = 'room'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    owner_name = db.Column(db.String(64), nullable=False)
    max_players = db.Column(db.Integer, nullable=False)
    password_hash = db.Column(db.String(256), nullable=True)
    status = db.Column(db.String(32), default=ROOM_WAITING, nullable=False)  # waiting, in_progress, completed
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id', name='fk_room_game_id', use_alter=True), nullable=True)

    course = db.relationship('Course')
    game = db.relationship('Game', foreign_keys=[game_id], post_update=True)
    participants = db.relationship('Participation', back_populates='room',
                                   order_by='Participation.id')

    def set_password(self, password, rounds=None):
        if password:
            self.password_hash = bcrypt.generate_password_hash(password, rounds).decode('utf-8')
        else:
            self.password_hash = None

    def check_password(self, password):
        if not self.password_hash:
            return True
        if not password:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_expired(self):
        return self.expires_at is not None and self.expires_at <= utcnow()

    @property
    def ready_count(self):
        return sum(1 for p in self.participants if p.is_ready)

    def to_dict(self, include_course=True):
        data = {
            'id': self.id,
            'name': self.name,
            'course_id': self.course_id,
            'owner_id': self.owner_id,
            'owner_name': self.owner_name,
            'max_players': self.max_players,
            'has_password': self.password_hash is not None,
            'status': self.status,
            'is_active': self.is_active,
            'is_expired': self.is_expired,
            'created_at': _iso(self.created_at),
            'expires_at': _iso(self.expires_at),
            'game_id': self.game_id,
            'participants': [p.to_dict() for p in self.participants],
            'ready_count': self.ready_count,
        }
        if include_course and self.course:
            data['course'] = self.course.to_dict()
        return data


class Participation(db.Model):
    __tablename__ = 'participation'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=True, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=True, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    player_name = db.Column(db.String(64), nullable=False)
    is_ready = db.Column(db.Boolean, default=False, nullable=False)
    joined_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    room = db.relationship('Room', back_populates='participants')
    game = db.relationship('Game', back_populates='participants', foreign_keys=[game_id])

    @property
    def player_key(self):
        return player_key_for(self.user_id, self.player_name)

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'game_id': self.game_id,
            'user_id': self.user_id,
            'player_name': self.player_name,
            'player_key': self.player_key,
            'is_ready': self.is_ready,
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=True)
    game_mode = db.Column(db.String(32), default=GAME_MULTIPLAYER, nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    owner_name = db.Column(db.String(64), nullable=True)
    max_players = db.Column(db.Integer, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=True)

    course = db.relationship('Course')
    participants = db.relationship('Participation', back_populates='game',
                                   foreign_keys='Participation.game_id',
                                   order_by='Participation.id')
    scores = db.relationship('Score', back_populates='game', lazy='dynamic')

    def to_dict(self, include_scores=True):
        data = {
            'id': self.id,
            'course_id': self.course_id,
            'room_id': self.room_id,
            'game_mode': self.game_mode,
            'owner_id': self.owner_id,
            'owner_name': self.owner_name,
            'max_players': self.max_players,
            'is_active': self.is_active,
            'created_at': _iso(self.created_at),
            'expires_at': _iso(self.expires_at),
            'participants': [p.to_dict() for p in self.participants],
        }
        if include_scores:
            data['scores'] = [s.to_dict() for s in self.scores.order_by(Score.hole_number, Score.id)]
        return data


class Score(db.Model):
    __tablename__ = 'score'
    __table_args__ = (
        db.UniqueConstraint('game_id', 'hole_number', 'player_key', name='game_score_unique'),
    )
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    hole_number = db.Column(db.Integer, nullable=False)
    player_key = db.Column(db.String(96), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    player_name = db.Column(db.String(64), nullable=True)
    strokes = db.Column(db.Integer, nullable=False)
    ob_count = db.Column(db.Integer, default=0, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    game = db.relationship('Game', back_populates='scores')

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'hole_number': self.hole_number,
            'player_key': self.player_key,
            'user_id': self.user_id,
            'player_name': self.player_name,
            'strokes': self.strokes,
            'ob_count': self.ob_count,
        }
