from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user

from discgolf import db
from discgolf.models import User, Room, Participation

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Disc golf rooms API', 'status': 'ok'})


@main.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(username=data.get('username')).first()
    if user and data.get('password') and user.check_password(data['password']):
        login_user(user, remember=True)
        return jsonify({"success": True, "user": user.to_dict()})
    return jsonify({"success": False, "error": "Invalid username or password"}), 401


@main.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    if not data.get('username') or not data.get('password'):
        return jsonify({"success": False, "error": "Missing username or password"}), 400
    if User.query.filter_by(username=data['username']).first():
        return jsonify({"success": False, "error": "Username already exists"}), 400

    new_user = User(username=data['username'])
    new_user.set_password(data['password'])
    db.session.add(new_user)
    db.session.commit()
    login_user(new_user)
    return jsonify({"success": True, "user": new_user.to_dict()}), 201


@main.route('/check_login', methods=['GET'])
@login_required
def check_login():
    return jsonify({"success": True, "user": current_user.to_dict()})


@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})


@main.route('/rooms/mine')
@login_required
def my_rooms():
    # Rooms the current user takes part in that are still open
    rooms = (Room.query.join(Participation)
             .filter(Participation.user_id == current_user.id, Room.is_active.is_(True))
             .all())
    return jsonify([room.to_dict(include_course=False) for room in rooms])
