from app import app
from models import db
from services.habit_service import seed_default_habits

def force_init():
    with app.app_context():
        print("Dropping all tables...")
        db.drop_all()
        print("Creating all tables...")
        db.create_all()

        # Stamp the migration so flask-migrate thinks we are up to date
        from flask_migrate import stamp
        stamp()

        seeded = seed_default_habits()
        print(f"Database initialized and stamped. Seeded {len(seeded)} default habits.")

if __name__ == "__main__":
    force_init()
