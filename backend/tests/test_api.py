def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json()['status'] == 'ok'


def test_create_and_fetch_course(client, course):
    assert course['total_holes'] == 3
    assert [h['par'] for h in course['holes']] == [3, 3, 4]

    res = client.get(f"/api/courses/{course['id']}")
    assert res.status_code == 200
    assert res.get_json()['name'] == 'Ekebergsletta'

    listed = client.get('/api/courses').get_json()
    assert listed == [{
        'id': course['id'],
        'name': 'Ekebergsletta',
        'location': 'Oslo',
        'par': 3,
        'total_holes': 3,
    }]
    assert client.get('/api/courses/999').status_code == 404


def test_create_course_rejects_bad_holes(client):
    assert client.post('/api/courses', json={}).status_code == 400
    res = client.post('/api/courses', json={'name': 'Dup', 'holes': [{'number': 1}, {'number': 1}]})
    assert res.status_code == 400
    res = client.post('/api/courses', json={'name': 'Bad', 'holes': 'eighteen'})
    assert res.status_code == 400


def test_register_login_logout(client):
    res = client.post('/register', json={'username': 'martin', 'password': 'secret'})
    assert res.status_code == 201
    assert client.get('/check_login').get_json()['user']['username'] == 'martin'

    assert client.post('/logout').status_code == 200
    assert client.get('/check_login').status_code == 401

    res = client.post('/login', json={'username': 'martin', 'password': 'wrong'})
    assert res.status_code == 401
    res = client.post('/login', json={'username': 'martin', 'password': 'secret'})
    assert res.status_code == 200
    assert res.get_json()['user']['username'] == 'martin'


def test_register_duplicate_username(client):
    client.post('/register', json={'username': 'martin', 'password': 'secret'})
    res = client.post('/register', json={'username': 'martin', 'password': 'other'})
    assert res.status_code == 400


def test_logged_in_user_owns_and_scores_as_user(client, course):
    user = client.post('/register', json={'username': 'martin', 'password': 'secret'}).get_json()['user']
    room = client.post('/api/rooms', json={
        'name': 'Members only', 'course_id': course['id'], 'max_players': 2,
    }).get_json()
    assert room['owner_id'] == user['id']
    assert room['owner_name'] == 'martin'
    assert room['participants'][0]['player_key'] == f"user:{user['id']}"

    # The session identity wins over any name in the body
    state = client.post(f"/api/rooms/{room['id']}/ready", json={}).get_json()
    assert state['status'] == 'in_progress'
    score = client.post(f"/api/rooms/{room['id']}/scores",
                        json={'hole_number': 1, 'strokes': 3}).get_json()
    assert score['player_key'] == f"user:{user['id']}"
    assert score['user_id'] == user['id']

    mine = client.get('/rooms/mine').get_json()
    assert [r['id'] for r in mine] == [room['id']]


def test_login_required_is_json(client):
    res = client.get('/rooms/mine')
    assert res.status_code == 401
    assert res.get_json()['error'] == 'Login required'


def test_unknown_route_is_json(client):
    res = client.get('/api/nothing-here')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_create_course_rejects_negative_distance(client):
    res = client.post('/api/courses', json={'name': 'Backwards', 'holes': [{'number': 1, 'distance': -5}]})
    assert res.status_code == 400
    assert client.get('/api/courses').get_json() == []
