from datetime import datetime, date, timedelta
from errors import ValidationError

DATE_FORMAT = '%Y-%m-%d'

def parse_date_key(value):
    """Turn a YYYY-MM-DD string into a date, raising ValidationError otherwise."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) != 10:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")

def format_date_key(value):
    return value.strftime(DATE_FORMAT)

def normalize_date_key(value):
    return format_date_key(parse_date_key(value))

def today_key():
    # Local calendar date; no timezone conversion happens past this point
    return format_date_key(datetime.now().date())

def trailing_dates(end, days):
    end = parse_date_key(end)
    try:
        return [end - timedelta(days=i) for i in range(days - 1, -1, -1)]
    except OverflowError:
        raise ValidationError(f"A {days} day window ending {format_date_key(end)} runs past the calendar")
