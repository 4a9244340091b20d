import os
import logging
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_compress import Compress
from sqlalchemy.orm import DeclarativeBase
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
    pass

db = SQLAlchemy(model_class=Base)
compress = Compress()

def _database_settings(database_url):
    """Resolve the SQLAlchemy URI and engine options for a DATABASE_URL"""
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    if database_url.startswith("postgresql://"):
        # Ensure psycopg2 driver is specified
        database_url = database_url.replace("postgresql://", "postgresql+psycopg2://", 1)

    if database_url.startswith("postgresql+psycopg2://"):
        engine_options = {
            "pool_size": 10,
            "pool_recycle": 280,  # Slightly less than 5 minutes to prevent stale connections
            "pool_pre_ping": True,
            "max_overflow": 15,
            "pool_timeout": 20,
            "connect_args": {
                "connect_timeout": 10,
                "application_name": "fleet_manager",
            }
        }
    elif database_url.startswith("sqlite") and ":memory:" not in database_url:
        engine_options = {
            "pool_recycle": 300,
            "pool_pre_ping": True,
        }
    else:
        # In-memory SQLite gets a static pool from Flask-SQLAlchemy
        engine_options = {}

    return database_url, engine_options

def create_app(config_overrides=None):
    # Create the app
    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    from utils.logging_config import setup_logging, log_request_start, log_request_end
    setup_logging(app)

    # CORS Configuration (restricted origins)
    production_origins = os.environ.get('ALLOWED_ORIGINS', '').split(',')
    allowed_origins = [origin.strip() for origin in production_origins if origin.strip()]

    # Fallback to localhost for development only if no origins set
    if not allowed_origins:
        allowed_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]

    CORS(app, origins=allowed_origins,
         supports_credentials=False,
         allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
         methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"])

    app.config['COMPRESS_MIMETYPES'] = ['application/json']
    app.config['COMPRESS_LEVEL'] = 6
    app.config['COMPRESS_MIN_SIZE'] = 500
    compress.init_app(app)

    # Configure the database - PostgreSQL in production, SQLite for development
    database_url, engine_options = _database_settings(
        os.environ.get("DATABASE_URL") or "sqlite:///fleet_manager.db"
    )
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options
    app.config["JSON_SORT_KEYS"] = False

    if config_overrides:
        app.config.update(config_overrides)
        if "SQLALCHEMY_DATABASE_URI" in config_overrides and "SQLALCHEMY_ENGINE_OPTIONS" not in config_overrides:
            _, app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _database_settings(
                config_overrides["SQLALCHEMY_DATABASE_URI"]
            )

    db.init_app(app)

    app.before_request(log_request_start)
    app.after_request(log_request_end)

    register_error_handlers(app)

    from user_routes import user_bp
    from driver_routes import driver_bp
    from delivery_routes import delivery_bp
    from report_routes import report_bp

    app.register_blueprint(user_bp)
    app.register_blueprint(driver_bp)
    app.register_blueprint(delivery_bp)
    app.register_blueprint(report_bp)

    @app.route('/api/v1/health')
    def health_check():
        from timezone_utils import get_local_time_naive
        return jsonify({'status': 'ok', 'timestamp': get_local_time_naive().isoformat()})

    with app.app_context():
        # Make sure models are registered on the metadata
        import models  # noqa: F401

    logger.info(f"Application created with database {database_url.split('://', 1)[0]}")
    return app

def register_error_handlers(app):
    """Render service and HTTP errors as JSON envelopes"""
    from services.errors import ServiceError, ValidationFailure

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        body = {
            'success': False,
            'error': error.code,
            'message': error.message
        }
        if isinstance(error, ValidationFailure) and error.details:
            body['details'] = error.details
        return jsonify(body), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({
            'success': False,
            'error': error.name.upper().replace(' ', '_'),
            'message': error.description
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error: {str(error)}")
        return jsonify({
            'success': False,
            'error': 'INTERNAL_ERROR',
            'message': 'Internal server error'
        }), 500
