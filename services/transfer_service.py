import logging
from datetime import datetime, timezone
from models import db, Habit, Completion
from errors import ValidationError
from catalog import check_icon, check_color
from services import habit_service, completion_service

logger = logging.getLogger(__name__)

def export_data():
    habits = habit_service.list_habits()
    completions = completion_service.get_all_completions()

    completion_data = {}
    for date_key in sorted(completions):
        ids = [h.id for h in habits if h.id in completions[date_key]]
        if ids:
            completion_data[date_key] = ids

    return {
        'habits': [h.to_dict() for h in habits],
        'completionData': completion_data,
        'exportDate': datetime.now(timezone.utc).isoformat(),
    }

def _validate_payload(payload):
    if not isinstance(payload, dict):
        raise ValidationError("Invalid data format: expected a JSON object")

    habits = payload.get('habits')
    if not isinstance(habits, list):
        raise ValidationError("Invalid data format: habits array is missing")

    completion_data = payload.get('completionData')
    if not isinstance(completion_data, dict):
        raise ValidationError("Invalid data format: completionData object is missing")

    seen_ids = set()
    for entry in habits:
        if not isinstance(entry, dict) or not entry.get('id') or not entry.get('name'):
            raise ValidationError("Invalid habit data: each habit must have an id and name")
        habit_id = str(entry['id'])
        if habit_id in seen_ids:
            raise ValidationError(f"Invalid habit data: duplicate id '{habit_id}'")
        seen_ids.add(habit_id)
        if not isinstance(entry['name'], str) or not entry['name'].strip():
            raise ValidationError("Invalid habit data: each habit must have an id and name")
        for field in ('icon', 'color'):
            if entry.get(field) is not None and not isinstance(entry[field], str):
                raise ValidationError(f"Invalid habit data: {field} for '{habit_id}' must be a string")
        check_icon(entry.get('icon'))
        check_color(entry.get('color'))

    for date_key, ids in completion_data.items():
        if not isinstance(ids, list):
            raise ValidationError(f"Invalid completion data for {date_key}: expected a list of habit ids")

    return habits, completion_data

def import_data(payload):
    """Replace every habit and completion with the contents of `payload`.

    Validation runs to completion before anything is written, and the
    replace happens in one transaction, so a rejected payload leaves the
    current data untouched.
    """
    habits, completion_data = _validate_payload(payload)

    new_habits = [
        Habit(id=str(entry['id']), name=entry['name'].strip(),
              icon=entry.get('icon') or None, color=entry.get('color') or None,
              position=position)
        for position, entry in enumerate(habits)
    ]
    known_ids = {h.id for h in new_habits}

    pairs = set()
    dropped = 0
    for date_key, ids in completion_data.items():
        for habit_id in ids:
            habit_id = str(habit_id)
            if habit_id in known_ids:
                pairs.add((date_key, habit_id))
            else:
                dropped += 1

    try:
        Completion.query.delete()
        Habit.query.delete()
        db.session.add_all(new_habits)
        db.session.flush()
        db.session.add_all(Completion(date=d, habit_id=h) for d, h in sorted(pairs))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    if dropped:
        logger.warning("Import skipped %d completion(s) for unknown habits", dropped)
    logger.info("Imported %d habits and %d completions", len(new_habits), len(pairs))
    return {'habits': len(new_habits), 'completions': len(pairs)}
