from typing import Dict, List, Optional, Tuple

from discgolf.errors import NotFound
from discgolf.models import Game, Room, Score


def _holes_played(game: Game, scores: List[Score]) -> List[Tuple[int, int]]:
    """(number, par) for every hole up to the highest one anybody has scored.

    Courses without hole records get generated holes at the course's par.
    """
    max_hole = max((s.hole_number for s in scores), default=0)
    course = game.course
    if course.holes:
        return [(h.number, h.par) for h in course.holes if h.number <= max_hole]
    return [(number, course.par) for number in range(1, max_hole + 1)]


def _player_row(participant, holes, by_key: Dict[Tuple[str, int], Score]) -> dict:
    rows = []
    for number, par in holes:
        score = by_key.get((participant.player_key, number))
        if score is None:
            rows.append({'hole_number': number, 'par': par, 'throws': None, 'ob': None, 'score': None})
            continue
        rows.append({
            'hole_number': number,
            'par': par,
            'throws': score.strokes,
            'ob': score.ob_count,
            'score': score.strokes + score.ob_count - par,
        })
    played = [r for r in rows if r['score'] is not None]
    ordered = sorted(played, key=lambda r: r['score'])
    best = ordered[0] if ordered and ordered[0]['score'] < 0 else None
    worst = ordered[-1] if ordered and ordered[-1]['score'] > 0 else None
    return {
        'participant_id': participant.id,
        'user_id': participant.user_id,
        'player_key': participant.player_key,
        'player_name': participant.player_name,
        'scores': rows,
        'holes_played': len(played),
        'total_score': sum(r['score'] for r in played),
        'total_throws': sum(r['throws'] for r in played),
        'total_ob': sum(r['ob'] for r in played),
        'best_hole': best,
        'worst_hole': worst,
    }


def _hole_averages(players: List[dict], holes) -> List[dict]:
    stats = []
    for number, _par in holes:
        values = [r['score'] for p in players for r in p['scores']
                  if r['hole_number'] == number and r['score'] is not None]
        stats.append({'number': number, 'average': sum(values) / len(values) if values else 0})
    return stats


def room_results(room: Room) -> dict:
    """Leaderboard for a multiplayer room, lowest total relative to par first."""
    game = room.game
    if game is None:
        raise NotFound('Room or game not found')
    scores = game.scores.all()
    holes = _holes_played(game, scores)
    by_key = {(s.player_key, s.hole_number): s for s in scores}

    participants = game.participants or room.participants
    players = [_player_row(p, holes, by_key) for p in participants]
    players.sort(key=lambda p: p['total_score'])
    for rank, player in enumerate(players, start=1):
        player['rank'] = rank

    stats = _hole_averages(players, holes)
    hardest: Optional[dict] = max(stats, key=lambda s: s['average'], default=None)
    easiest: Optional[dict] = min(stats, key=lambda s: s['average'], default=None)
    return {
        'room_id': room.id,
        'game_id': game.id,
        'course_name': game.course.name,
        'date': room.created_at.isoformat(),
        'status': room.status,
        'players': players,
        'hardest_hole': hardest if hardest and hardest['average'] > 0 else None,
        'easiest_hole': easiest if easiest and easiest['average'] < 0 else None,
    }


def game_results(game: Game) -> dict:
    """Per-hole card for a solo game."""
    pars = {h.number: h.par for h in game.course.holes}
    scores = game.scores.order_by(Score.hole_number).all()
    player_name = scores[0].player_name if scores and scores[0].player_name else game.owner_name
    return {
        'game_id': game.id,
        'course_name': game.course.name,
        'player_name': player_name or 'Unknown',
        'scores': [
            {
                'hole_number': s.hole_number,
                'par': pars.get(s.hole_number, game.course.par),
                'throws': s.strokes,
                'ob': s.ob_count,
            }
            for s in scores
        ],
    }
