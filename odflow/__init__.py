"""
ODFlow Application Factory
On-Duty request approval portal
"""

import os
from flask import Flask, jsonify
from flask_cors import CORS
from odflow.models import db
from odflow.models.database import init_db, check_connection
from odflow.routes import auth_bp, student_bp, mentor_bp, hod_bp, principal_bp, admin_bp, faculty_bp
from odflow.utils import DatabaseError, setup_logging, log_error, log_info, create_response


def create_app(config_name: str = None) -> Flask:
    """
    Application factory

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Import and set configuration
    from config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)
    config_class.init_app(app)

    # Initialize extensions
    db.init_app(app)
    CORS(app, supports_credentials=True)

    # Setup logging
    with app.app_context():
        setup_logging()
        log_info(f"Application initialized ({config_name})")

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(student_bp, url_prefix='/api/student')
    app.register_blueprint(mentor_bp, url_prefix='/api/mentor')
    app.register_blueprint(hod_bp, url_prefix='/api/hod')
    app.register_blueprint(principal_bp, url_prefix='/api/principal')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(faculty_bp, url_prefix='/api/faculty')

    @app.route('/api/health', methods=['GET'])
    def health():
        if check_connection():
            return jsonify(create_response(True, "Service healthy", {'database': 'connected'}))
        return jsonify(create_response(False, "Database unavailable", {'database': 'disconnected'})), 503

    @app.errorhandler(413)
    def request_too_large(error):
        return jsonify(create_response(False, "Uploaded files are too large")), 413

    # Create database tables
    with app.app_context():
        try:
            init_db()
            log_info("Database tables created successfully")
        except DatabaseError as e:
            log_error("Database initialization warning", e)

    return app
