import pytest
from app import create_app
from models import db

@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SEED_DEFAULT_HABITS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client

@pytest.fixture
def make_habit(app):
    from services.habit_service import add_habit

    def _make(name='Run', icon=None, color=None):
        return add_habit(name, icon=icon, color=color)
    return _make
