import logging
from sqlalchemy import func
from models import db, Habit
from errors import ValidationError, NotFoundError
from catalog import DEFAULT_HABITS
from services import completion_service

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('name', 'icon', 'color')

def _clean_name(name):
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Habit name cannot be empty")
    return name.strip()

def _next_position():
    current = db.session.query(func.max(Habit.position)).scalar()
    return 0 if current is None else current + 1

def get_habit(habit_id):
    habit = db.session.get(Habit, habit_id) if habit_id else None
    if habit is None:
        raise NotFoundError(f"Habit '{habit_id}' not found")
    return habit

def list_habits():
    return Habit.query.order_by(Habit.position).all()

def add_habit(name, icon=None, color=None):
    habit = Habit(name=_clean_name(name), icon=icon or None, color=color or None,
                  position=_next_position())
    db.session.add(habit)
    db.session.commit()
    logger.info("Added habit %s (%s)", habit.id, habit.name)
    return habit

def edit_habit(habit_id, patch):
    unknown = set(patch) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

    habit = get_habit(habit_id)
    # Validate before touching the row so a bad patch changes nothing
    name = _clean_name(patch['name']) if 'name' in patch else habit.name

    habit.name = name
    if 'icon' in patch:
        habit.icon = patch['icon'] or None
    if 'color' in patch:
        habit.color = patch['color'] or None
    db.session.commit()
    logger.info("Edited habit %s", habit.id)
    return habit

def delete_habit(habit_id):
    habit = get_habit(habit_id)
    try:
        removed = completion_service.cascade_delete_for_habit(habit.id)
        db.session.delete(habit)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Deleted habit %s and %d completion(s)", habit_id, removed)

def seed_default_habits():
    if Habit.query.first() is not None:
        return []

    position = _next_position()
    seeded = []
    for offset, (name, icon, color) in enumerate(DEFAULT_HABITS):
        habit = Habit(name=name, icon=icon, color=color, position=position + offset)
        db.session.add(habit)
        seeded.append(habit)

    db.session.commit()
    logger.info("Seeded %d default habits", len(seeded))
    return seeded
