from flask_login import current_user

from discgolf.services.rooms.registry import PlayerIdentity


def identity_from_request(data) -> PlayerIdentity:
    """Resolve who is acting: the logged-in user, otherwise a named guest."""
    name = data.get('player_name')
    name = name.strip() if isinstance(name, str) else None
    if current_user.is_authenticated:
        return PlayerIdentity(current_user.id, name or current_user.username)
    return PlayerIdentity(None, name or None)
