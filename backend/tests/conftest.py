import os
import sys
import pytest

# Ensure the backend root (containing the `discgolf` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from discgolf import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    ROOM_TTL_HOURS = 6
    SOLO_GAME_TTL_HOURS = 3
    MIN_ROOM_PLAYERS = 2
    MAX_ROOM_PLAYERS = 20
    # Lowest cost bcrypt accepts; keeps the suite fast
    BCRYPT_LOG_ROUNDS = 4


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import discgolf.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def course(client):
    res = client.post('/api/courses', json={
        'name': 'Ekebergsletta',
        'location': 'Oslo',
        'holes': [
            {'number': 1, 'par': 3, 'distance': 72},
            {'number': 2, 'par': 3, 'distance': 85},
            {'number': 3, 'par': 4, 'distance': 140},
        ],
    })
    assert res.status_code == 201
    return res.get_json()


@pytest.fixture()
def make_room(client, course):
    """Create a room owned by a guest and return its JSON state."""
    def _make(owner='Owner', max_players=2, password=None, name='Saturday round'):
        body = {
            'name': name,
            'course_id': course['id'],
            'owner_name': owner,
            'max_players': max_players,
        }
        if password is not None:
            body['password'] = password
        res = client.post('/api/rooms', json=body)
        assert res.status_code == 201, res.get_json()
        return res.get_json()
    return _make
