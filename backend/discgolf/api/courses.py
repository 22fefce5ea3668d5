from flask import Blueprint, jsonify, request, current_app

from discgolf import db
from discgolf.errors import CourseNotFound, InvalidInput
from discgolf.models import Course, Hole, DEFAULT_PAR


courses = Blueprint('courses', __name__)


def _parse_holes(raw):
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidInput('holes must be a list')
    holes = []
    seen = set()
    for index, item in enumerate(raw, start=1):
        if not isinstance(item, dict):
            raise InvalidInput('Invalid hole payload')
        try:
            number = int(item.get('number', index))
            par = int(item.get('par', DEFAULT_PAR))
            distance = int(item.get('distance') or 0)
        except (TypeError, ValueError):
            raise InvalidInput('Hole number, par and distance must be integers')
        if number < 1 or par < 1 or distance < 0 or number in seen:
            raise InvalidInput(f'Invalid hole {number}')
        seen.add(number)
        holes.append(Hole(number=number, par=par, distance=distance))
    return holes


@courses.route('', methods=['GET'])
def list_courses():
    return jsonify([c.to_dict(include_holes=False) for c in Course.query.order_by(Course.name).all()])


@courses.route('', methods=['POST'])
def create_course():
    """Create a course, optionally with its holes."""
    data = request.get_json(silent=True) or {}
    name = data.get('name')
    if not name:
        raise InvalidInput('Course name is required')
    try:
        par = int(data.get('par') or DEFAULT_PAR)
    except (TypeError, ValueError):
        raise InvalidInput('par must be an integer')

    course = Course(name=name, location=data.get('location'), par=par)
    course.holes.extend(_parse_holes(data.get('holes')))
    db.session.add(course)
    db.session.commit()
    current_app.logger.info(f"[course-create] course={course.id} holes={course.total_holes}")
    return jsonify(course.to_dict()), 201


@courses.route('/<int:course_id>', methods=['GET'])
def get_course(course_id):
    course = db.session.get(Course, course_id)
    if course is None:
        raise CourseNotFound(course_id)
    return jsonify(course.to_dict())
