from flask import request, jsonify, current_app
from . import history_bp
from services import completion_service, contribution_service
from errors import ValidationError
from utils import today_key, normalize_date_key

@history_bp.route('/completions', methods=['GET'])
def completions():
    date_str = request.args.get('date')
    if date_str:
        date_key = normalize_date_key(date_str)
        ids = completion_service.get_completions_for_date(date_key)
        return jsonify({'status': 'success', 'date': date_key, 'habit_ids': sorted(ids)})

    all_completions = completion_service.get_all_completions()
    return jsonify({
        'status': 'success',
        'completionData': {d: sorted(ids) for d, ids in all_completions.items()},
    })

@history_bp.route('/today', methods=['GET'])
def today():
    date_key = normalize_date_key(request.args.get('date') or today_key())
    habits, completions_by_date = contribution_service.load_snapshot()
    summary = contribution_service.daily_summary(date_key, habits, completions_by_date)
    return jsonify({'status': 'success', **summary})

@history_bp.route('/contributions', methods=['GET'])
def contributions():
    today_str = normalize_date_key(request.args.get('today') or today_key())

    days = request.args.get('days')
    if days is None:
        days = current_app.config['CONTRIBUTION_WINDOW_DAYS']
    else:
        try:
            days = int(days)
        except ValueError:
            raise ValidationError(f"Invalid window size '{days}'")

    habits, completions_by_date = contribution_service.load_snapshot()
    buckets = contribution_service.compute_window(today_str, days, habits, completions_by_date)
    weeks = contribution_service.group_into_weeks(buckets)

    return jsonify({
        'status': 'success',
        'today': today_str,
        'window_days': days,
        'total_habits': len(habits),
        'buckets': [b.to_dict() for b in buckets],
        'weeks': [[b.date for b in week] for week in weeks],
    })

@history_bp.route('/contributions/<date_str>', methods=['GET'])
def contribution_day(date_str):
    date_key = normalize_date_key(date_str)
    habits, completions_by_date = contribution_service.load_snapshot()
    completed = contribution_service.habits_completed_on(date_key, habits, completions_by_date)
    return jsonify({
        'status': 'success',
        'date': date_key,
        'habits': [h.to_dict() for h in completed],
        'total': len(habits),
    })
