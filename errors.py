class HabitTrackerError(Exception):
    kind = 'error'
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'status': 'error', 'error': self.kind, 'message': self.message}

class ValidationError(HabitTrackerError):
    """Blank habit name, malformed date key or import payload."""
    kind = 'validation'
    status_code = 400

class NotFoundError(HabitTrackerError):
    """The targeted habit id does not exist."""
    kind = 'not_found'
    status_code = 404

class ConflictError(HabitTrackerError):
    """Lost a race on the (date, habit_id) unique constraint."""
    kind = 'conflict'
    status_code = 409
