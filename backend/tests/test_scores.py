import pytest

from discgolf.models import Score


@pytest.fixture()
def started_room(client, make_room):
    room = make_room(owner='Anna', max_players=2)
    client.post('/api/rooms/join', json={'room_id': room['id'], 'player_name': 'Bjorn'})
    client.post(f"/api/rooms/{room['id']}/ready", json={'player_name': 'Anna'})
    state = client.post(f"/api/rooms/{room['id']}/ready", json={'player_name': 'Bjorn'}).get_json()
    assert state['status'] == 'in_progress'
    return state


def test_resubmitting_score_overwrites(client, started_room):
    game_id = started_room['game_id']
    url = f'/api/games/{game_id}/scores'
    first = client.post(url, json={'player_name': 'Anna', 'hole_number': 1, 'strokes': 4, 'ob_count': 1})
    assert first.status_code == 200
    second = client.post(url, json={'player_name': 'Anna', 'hole_number': 1, 'strokes': 3})
    assert second.status_code == 200
    assert second.get_json()['id'] == first.get_json()['id']

    rows = Score.query.filter_by(game_id=game_id, hole_number=1, player_key='guest:Anna').all()
    assert len(rows) == 1
    assert rows[0].strokes == 3
    assert rows[0].ob_count == 0


def test_scores_are_per_player_and_hole(client, started_room):
    game_id = started_room['game_id']
    url = f'/api/games/{game_id}/scores'
    client.post(url, json={'player_name': 'Anna', 'hole_number': 1, 'strokes': 3})
    client.post(url, json={'player_name': 'Bjorn', 'hole_number': 1, 'strokes': 4})
    client.post(url, json={'player_name': 'Anna', 'hole_number': 2, 'strokes': 2})

    scores = client.get(url).get_json()
    assert [(s['hole_number'], s['player_name'], s['strokes']) for s in scores] == [
        (1, 'Anna', 3),
        (1, 'Bjorn', 4),
        (2, 'Anna', 2),
    ]


def test_score_via_room(client, started_room):
    room_id = started_room['id']
    res = client.post(f'/api/rooms/{room_id}/scores',
                      json={'player_name': 'Bjorn', 'hole_number': 2, 'strokes': 5, 'ob_count': 2})
    assert res.status_code == 200
    body = res.get_json()
    assert body['game_id'] == started_room['game_id']
    assert body['ob_count'] == 2


def test_score_for_missing_game_or_unstarted_room(client, make_room):
    res = client.post('/api/games/999/scores', json={'player_name': 'Anna', 'hole_number': 1, 'strokes': 3})
    assert res.status_code == 404

    room = make_room()
    res = client.post(f"/api/rooms/{room['id']}/scores", json={'player_name': 'Owner', 'hole_number': 1, 'strokes': 3})
    assert res.status_code == 404
    assert client.post('/api/rooms/999/scores', json={'player_name': 'A', 'hole_number': 1, 'strokes': 3}).status_code == 404


@pytest.mark.parametrize('body', [
    {'player_name': 'Anna', 'hole_number': 0, 'strokes': 3},
    {'player_name': 'Anna', 'hole_number': 1, 'strokes': 0},
    {'player_name': 'Anna', 'hole_number': 1, 'strokes': 'three'},
    {'player_name': 'Anna', 'hole_number': 1, 'strokes': 3, 'ob_count': -1},
    {'hole_number': 1, 'strokes': 3},
])
def test_score_validation(client, started_room, body):
    res = client.post(f"/api/games/{started_room['game_id']}/scores", json=body)
    assert res.status_code == 400
    assert 'error' in res.get_json()


def test_game_state_includes_scores(client, started_room):
    game_id = started_room['game_id']
    client.post(f'/api/games/{game_id}/scores', json={'player_name': 'Anna', 'hole_number': 1, 'strokes': 3})
    state = client.get(f'/api/games/{game_id}').get_json()
    assert state['game_mode'] == 'multiplayer'
    assert state['room_id'] == started_room['id']
    assert len(state['participants']) == 2
    assert state['scores'][0]['strokes'] == 3
    assert state['course']['name'] == 'Ekebergsletta'
    assert client.get('/api/games/999').status_code == 404


def test_solo_game_flow(client, course):
    res = client.post('/api/games', json={'course_id': course['id'], 'player_name': 'Solo'})
    assert res.status_code == 201
    body = res.get_json()
    game_id = body['game_id']
    assert body['game']['game_mode'] == 'singleplayer'
    assert body['game']['max_players'] == 1
    assert body['game']['participants'][0]['is_ready'] is True
    assert body['course']['total_holes'] == 3

    client.post(f'/api/games/{game_id}/scores', json={'player_name': 'Solo', 'hole_number': 1, 'strokes': 2})
    client.post(f'/api/games/{game_id}/scores', json={'player_name': 'Solo', 'hole_number': 3, 'strokes': 5, 'ob_count': 1})
    results = client.get(f'/api/games/{game_id}/results').get_json()
    assert results['player_name'] == 'Solo'
    assert results['course_name'] == 'Ekebergsletta'
    assert results['scores'] == [
        {'hole_number': 1, 'par': 3, 'throws': 2, 'ob': 0},
        {'hole_number': 3, 'par': 4, 'throws': 5, 'ob': 1},
    ]


def test_solo_game_validation(client, course):
    assert client.post('/api/games', json={'course_id': course['id']}).status_code == 400
    assert client.post('/api/games', json={'course_id': 999, 'player_name': 'Solo'}).status_code == 404


def test_score_for_hole_not_on_course_is_rejected(client, started_room):
    res = client.post(f"/api/games/{started_room['game_id']}/scores",
                      json={'player_name': 'Anna', 'hole_number': 7, 'strokes': 3})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Hole 7 is not on this course'
    assert Score.query.filter_by(game_id=started_room['game_id']).count() == 0
