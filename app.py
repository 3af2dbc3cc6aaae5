import os
import logging
from flask import Flask, jsonify
from flask_migrate import Migrate
from dotenv import load_dotenv
from models import db
from errors import HabitTrackerError
from services.contribution_service import DEFAULT_WINDOW_DAYS

load_dotenv()

migrate = Migrate()
logger = logging.getLogger(__name__)

def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

def configure_logging(level):
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

def register_error_handlers(app):
    @app.errorhandler(HabitTrackerError)
    def handle_tracker_error(error):
        logger.info("%s: %s", error.kind, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def handle_unknown_route(error):
        return jsonify({'status': 'error', 'error': 'not_found', 'message': 'Unknown route'}), 404

    @app.errorhandler(405)
    def handle_bad_method(error):
        return jsonify({'status': 'error', 'error': 'method_not_allowed', 'message': str(error)}), 405

def create_app(test_config=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev_key_change_in_prod')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('SQLALCHEMY_DATABASE_URI', 'sqlite:///db.sqlite3')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['CONTRIBUTION_WINDOW_DAYS'] = int(os.environ.get('CONTRIBUTION_WINDOW_DAYS', DEFAULT_WINDOW_DAYS))
    app.config['SEED_DEFAULT_HABITS'] = _env_flag('SEED_DEFAULT_HABITS')
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO').upper()

    if test_config:
        app.config.update(test_config)

    configure_logging(app.config['LOG_LEVEL'])

    db.init_app(app)
    migrate.init_app(app, db)

    from routes import habits_bp, history_bp, transfer_bp
    app.register_blueprint(habits_bp, url_prefix='/api/habits')
    app.register_blueprint(history_bp, url_prefix='/api')
    app.register_blueprint(transfer_bp, url_prefix='/api/data')

    register_error_handlers(app)

    if app.config['SEED_DEFAULT_HABITS']:
        from services.habit_service import seed_default_habits
        with app.app_context():
            db.create_all()
            seed_default_habits()

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    return app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True)
