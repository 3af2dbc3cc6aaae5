import uuid
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
from datetime import datetime

db = SQLAlchemy()

@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    if type(dbapi_connection).__module__.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def generate_habit_id():
    return uuid.uuid4().hex

class Habit(db.Model):
    id = db.Column(db.String(32), primary_key=True, default=generate_habit_id)
    name = db.Column(db.String(200), nullable=False)
    icon = db.Column(db.String(50), nullable=True)
    color = db.Column(db.String(50), nullable=True)
    position = db.Column(db.Integer, nullable=False, index=True) # Insertion order
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    completions = db.relationship('Completion', backref='habit', lazy=True,
                                  cascade="all, delete-orphan", passive_deletes=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'icon': self.icon,
            'color': self.color,
        }

    def __repr__(self):
        return f'<Habit {self.id} {self.name!r}>'

class Completion(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.String(10), nullable=False) # YYYY-MM-DD, caller's local date
    habit_id = db.Column(db.String(32), db.ForeignKey('habit.id', ondelete='CASCADE'), nullable=False, index=True)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (db.UniqueConstraint('date', 'habit_id', name='_completion_date_habit_uc'),)

    def __repr__(self):
        return f'<Completion {self.date} {self.habit_id}>'
