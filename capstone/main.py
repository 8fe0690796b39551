import os
from flask import Flask, jsonify
from config.config import config
from capstone.database import init_db, db_session
from capstone.routes import admin, faculty, students
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(config_name=None):
    """Application factory"""
    config_name = config_name or os.environ.get('FLASK_ENV', 'default')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    init_db()

    app.register_blueprint(admin.bp, url_prefix='/api/admin')
    app.register_blueprint(students.bp, url_prefix='/api/student')
    app.register_blueprint(faculty.bp, url_prefix='/api/faculty')

    @app.route('/')
    def index():
        return 'Server is up and running'

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'message': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled server error: {str(error)}")
        return jsonify({'message': 'Internal server error'}), 500

    @app.teardown_appcontext
    def remove_session(exception=None):
        db_session.remove()

    logger.info(f"Capstone tracker started with {config_name} config")
    return app
