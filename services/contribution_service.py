"""Contribution graph projection.

Everything here except `load_snapshot` is a pure function over a list of
habits and a ``{date_key: set(habit_id)}`` mapping, so it can be fed either
from the database or from an imported payload.
"""
from models import db, Habit, Completion
from errors import ValidationError
from utils import parse_date_key, format_date_key, trailing_dates

DEFAULT_WINDOW_DAYS = 112 # 16 full weeks
MAX_WINDOW_DAYS = 3660 # roughly ten years
WEEK_LENGTH = 7

# Lower bounds of bands 1-4; exactly 100 is band 5 and 0 is band 0
BAND_THRESHOLDS = (0, 25, 50, 75)

class DayBucket:
    def __init__(self, date, completed_habit_ids, total_habits):
        self.date = date
        self.completed_habit_ids = frozenset(completed_habit_ids)
        self.total_habits = total_habits
        if total_habits == 0:
            self.percentage = 0
        else:
            self.percentage = 100 * len(self.completed_habit_ids) / total_habits
        self.band = completion_band(self.percentage)

    @property
    def completed_count(self):
        return len(self.completed_habit_ids)

    def to_dict(self):
        return {
            'date': self.date,
            'completed_habit_ids': sorted(self.completed_habit_ids),
            'completed': self.completed_count,
            'total': self.total_habits,
            'percentage': self.percentage,
            'band': self.band,
        }

    def __repr__(self):
        return f'<DayBucket {self.date} {self.percentage:.0f}%>'

def completion_band(percentage):
    if percentage <= 0:
        return 0
    if percentage >= 100:
        return 5
    band = 0
    for threshold in BAND_THRESHOLDS:
        if percentage >= threshold:
            band += 1
    return band

def window_dates(today, window_size_days=DEFAULT_WINDOW_DAYS):
    if isinstance(window_size_days, bool) or not isinstance(window_size_days, int) or window_size_days < 1:
        raise ValidationError(f"Window size must be a positive number of days, got {window_size_days!r}")
    if window_size_days > MAX_WINDOW_DAYS:
        raise ValidationError(f"Window size cannot exceed {MAX_WINDOW_DAYS} days, got {window_size_days}")
    return [format_date_key(d) for d in trailing_dates(parse_date_key(today), window_size_days)]

def compute_window(today, window_size_days, habits, completions_by_date):
    total = len(habits)
    return [
        DayBucket(date_key, completions_by_date.get(date_key) or (), total)
        for date_key in window_dates(today, window_size_days)
    ]

def group_into_weeks(buckets):
    return [list(buckets[i:i + WEEK_LENGTH]) for i in range(0, len(buckets), WEEK_LENGTH)]

def habits_completed_on(date_key, habits, completions_by_date):
    completed_ids = completions_by_date.get(date_key) or ()
    return [h for h in habits if h.id in completed_ids]

def daily_summary(date_key, habits, completions_by_date):
    bucket = DayBucket(date_key, completions_by_date.get(date_key) or (), len(habits))
    return {
        'date': date_key,
        'completed': [h.id for h in habits_completed_on(date_key, habits, completions_by_date)],
        'total': bucket.total_habits,
        'percentage': bucket.percentage,
    }

def load_snapshot():
    """Read habits and their completions with a single SELECT.

    One statement means the habit list and the completion log always come
    from the same point in time.
    """
    rows = db.session.query(Habit, Completion.date)\
        .outerjoin(Completion, Completion.habit_id == Habit.id)\
        .order_by(Habit.position)\
        .all()

    habits = []
    seen = set()
    completions_by_date = {}
    for habit, date_key in rows:
        if habit.id not in seen:
            seen.add(habit.id)
            habits.append(habit)
        if date_key is not None:
            completions_by_date.setdefault(date_key, set()).add(habit.id)
    return habits, completions_by_date
