from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_cors import CORS
import structlog
from sqlalchemy import event
from sqlalchemy.engine import Engine
from retry import retry
import time

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
logger = structlog.get_logger()


# Database connection retry decorator
@retry(tries=3, delay=2, backoff=2)
def init_db_with_retry(app):
    """Initialize database with retry logic"""
    try:
        db.init_app(app)
        # Test connection
        with app.app_context():
            with db.engine.connect():
                pass
        logger.info("Database connection established successfully")
    except Exception as e:
        logger.error(f"Database connection failed: {str(e)}")
        raise


def create_app(config_name='development'):
    """
    Application factory function to create and configure the Flask application

    Args:
        config_name (str, optional): Name of the configuration environment.
                                     Defaults to 'development'.

    Returns:
        Flask: Configured Flask application instance
    """
    # Import config dynamically to avoid circular imports
    from .config import get_config

    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)
    config_class.init_app(app)

    cors_options = {
        'origins': app.config['CORS_ORIGINS'],
        'methods': ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS', 'PATCH'],
        'allow_headers': ['Content-Type', 'Authorization', 'Cache-Control', 'Pragma'],
        'supports_credentials': True
    }
    CORS(app, **cors_options)
    logger.debug(f"CORS Origins configured: {app.config['CORS_ORIGINS']}")

    if app.config.get('LOG_TO_STDOUT'):
        _setup_logging(app)

    _configure_database(app)

    init_db_with_retry(app)
    migrate.init_app(app, db, directory=app.config.get('MIGRATIONS_DIR', 'migrations'))

    _configure_security(app)
    _configure_login_manager(app)

    with app.app_context():
        _init_database_models(app)

    _register_blueprints(app)
    _setup_error_handlers(app)

    app.logger.info(f"Starting application in {config_name} mode")
    return app


def _register_blueprints(app):
    """
    Register application blueprints

    Args:
        app (Flask): Flask application instance
    """
    from .routes import (
        auth_bp,
        contacts_bp,
        vendors_bp,
        jobs_bp,
        equipment_bp,
        profile_bp
    )

    blueprints = [
        (auth_bp, '/auth'),
        (contacts_bp, '/contacts'),
        (vendors_bp, '/vendors'),
        (jobs_bp, '/jobs'),
        (equipment_bp, '/equipment'),
        (profile_bp, '/profile')
    ]

    for blueprint, url_prefix in blueprints:
        app.register_blueprint(blueprint, url_prefix=url_prefix)


def _setup_error_handlers(app):
    """
    Set up custom error handlers for the application

    Args:
        app (Flask): Flask application instance
    """
    from flask import jsonify
    from .errors import RecordError, AuthCancelled

    @app.errorhandler(RecordError)
    def handle_record_error(error):
        """
        Render a record flow failure as a JSON error body.
        A cancelled sign-in is not an error and returns an empty response.
        """
        if isinstance(error, AuthCancelled):
            return '', 204
        logger.warning(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.http_status

    @app.errorhandler(404)
    def page_not_found(error):
        app.logger.error(f'Page not found: {error}')
        return jsonify({"error": "not_found", "message": "Resource not found"}), 404

    @app.errorhandler(500)
    def internal_server_error(error):
        app.logger.error(f'Server Error: {error}')
        db.session.rollback()  # Rollback any pending database changes
        return jsonify({"error": "internal_error", "message": "An unexpected error occurred"}), 500


def _configure_database(app):
    """Configure database specific settings"""
    uri = app.config['SQLALCHEMY_DATABASE_URI']

    if 'mysql' in uri:
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
            'pool_size': app.config.get('SQLALCHEMY_POOL_SIZE', 10),
            'pool_recycle': app.config.get('SQLALCHEMY_POOL_RECYCLE', 3600),
            'pool_pre_ping': True,
        }

    elif 'postgresql' in uri:
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
            'pool_size': app.config.get('SQLALCHEMY_POOL_SIZE', 10),
            'pool_pre_ping': True,
        }

    # Configure SQLAlchemy performance monitoring
    @event.listens_for(Engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault('query_start_time', []).append(time.time())

    @event.listens_for(Engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total = time.time() - conn.info['query_start_time'].pop()
        if total > app.config.get('SLOW_QUERY_THRESHOLD', 0.5):
            logger.warning(f"Slow query detected: {total:.2f}s\n{statement}")


def _configure_security(app):
    """Configure security headers and session cookie lifetime"""

    @app.after_request
    def add_security_headers(response):
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Content-Security-Policy'] = app.config.get(
            'CONTENT_SECURITY_POLICY',
            "default-src 'self'"
        )
        return response

    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['PERMANENT_SESSION_LIFETIME'] = app.config.get('PERMANENT_SESSION_LIFETIME', 3600)


def _init_database_models(app):
    """Import models so their tables are registered, then create them"""
    from .models.user import User
    from .models.contact import Contact
    from .models.vendor import Vendor
    from .models.job import SolarJob
    from .models.equipment import Equipment

    db.create_all()
    app.logger.debug("Database tables ready")


def _setup_logging(app):
    """Setup enhanced logging configuration"""
    import logging
    import sys

    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.INFO)

    app.logger.addHandler(stream_handler)
    app.logger.setLevel(app.config.get('LOGGING_LEVEL', logging.INFO))


def _configure_login_manager(app):
    """Configure Flask-Login; the session cookie carries only the user id"""
    login_manager.init_app(app)
    login_manager.session_protection = "strong"

    app.config['REMEMBER_COOKIE_HTTPONLY'] = True
    app.config['REMEMBER_COOKIE_SAMESITE'] = 'Lax'

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        try:
            user = db.session.get(User, int(user_id))
            if user and user.is_active:
                return user
            return None
        except Exception as e:
            app.logger.error(f"Error loading user {user_id}: {str(e)}")
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        from flask import jsonify
        return jsonify({
            "error": "unauthorized",
            "message": "You must be signed in to access this resource"
        }), 401

    app.logger.info("Login manager configured")
