import logging
from sqlalchemy.exc import IntegrityError
from models import db, Habit, Completion
from errors import NotFoundError, ConflictError
from utils import normalize_date_key

logger = logging.getLogger(__name__)

def _require_habit(habit_id):
    if not habit_id or db.session.get(Habit, habit_id) is None:
        raise NotFoundError(f"Habit '{habit_id}' not found")

def _find_completion(habit_id, date_key):
    return Completion.query.filter_by(habit_id=habit_id, date=date_key).first()

def toggle_completion(habit_id, date_key):
    """Flip whether `habit_id` is complete on `date_key` and return the new state.

    Applying it twice restores the original state. A concurrent writer that
    created the same (date, habit) row first surfaces as ConflictError.
    """
    date_key = normalize_date_key(date_key)
    _require_habit(habit_id)

    completion = _find_completion(habit_id, date_key)

    if completion:
        db.session.delete(completion)
        completed = False
    else:
        db.session.add(Completion(habit_id=habit_id, date=date_key))
        completed = True

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning("Toggle race on habit %s for %s", habit_id, date_key)
        raise ConflictError(f"Completion for habit '{habit_id}' on {date_key} changed concurrently")

    logger.debug("Habit %s on %s -> %s", habit_id, date_key, completed)
    return completed

def is_completed(habit_id, date_key):
    date_key = normalize_date_key(date_key)
    return Completion.query.filter_by(habit_id=habit_id, date=date_key).first() is not None

def get_completions_for_date(date_key):
    date_key = normalize_date_key(date_key)
    rows = db.session.query(Completion.habit_id).filter(Completion.date == date_key).all()
    return {habit_id for (habit_id,) in rows}

def get_all_completions():
    completions = {}
    for date_key, habit_id in db.session.query(Completion.date, Completion.habit_id).all():
        completions.setdefault(date_key, set()).add(habit_id)
    return completions

def cascade_delete_for_habit(habit_id):
    # Caller owns the transaction; nothing is committed here
    return Completion.query.filter_by(habit_id=habit_id).delete(synchronize_session='fetch')
