import logging
from flask import request, jsonify
from . import habits_bp
from services import habit_service, completion_service
from catalog import check_icon, check_color, catalog_dict
from errors import ValidationError, ConflictError
from utils import today_key, normalize_date_key

logger = logging.getLogger(__name__)

def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data

@habits_bp.route('', methods=['GET'])
def list_habits():
    return jsonify({'status': 'success', 'habits': [h.to_dict() for h in habit_service.list_habits()]})

@habits_bp.route('/catalog', methods=['GET'])
def catalog():
    return jsonify(catalog_dict())

@habits_bp.route('', methods=['POST'])
def add_habit():
    data = _json_body()
    habit = habit_service.add_habit(
        data.get('name'),
        icon=check_icon(data.get('icon')),
        color=check_color(data.get('color')),
    )
    return jsonify({'status': 'success', 'habit': habit.to_dict()}), 201

@habits_bp.route('/<habit_id>', methods=['GET'])
def get_habit(habit_id):
    return jsonify({'status': 'success', 'habit': habit_service.get_habit(habit_id).to_dict()})

@habits_bp.route('/<habit_id>', methods=['PATCH'])
def edit_habit(habit_id):
    patch = _json_body()
    if 'icon' in patch:
        check_icon(patch['icon'])
    if 'color' in patch:
        check_color(patch['color'])
    habit = habit_service.edit_habit(habit_id, patch)
    return jsonify({'status': 'success', 'habit': habit.to_dict()})

@habits_bp.route('/<habit_id>', methods=['DELETE'])
def delete_habit(habit_id):
    habit_service.delete_habit(habit_id)
    return jsonify({'status': 'success'})

@habits_bp.route('/<habit_id>/toggle', methods=['POST'])
def toggle_habit(habit_id):
    date_key = normalize_date_key(request.args.get('date') or today_key())

    try:
        completed = completion_service.toggle_completion(habit_id, date_key)
    except ConflictError:
        # A habit deleted mid-toggle is a 404, not a lost race
        habit_service.get_habit(habit_id)
        # Another writer got there first; report whatever state won
        completed = completion_service.is_completed(habit_id, date_key)
        logger.info("Resolved toggle conflict on habit %s for %s as %s", habit_id, date_key, completed)

    return jsonify({'status': 'success', 'completed': completed, 'date': date_key})
