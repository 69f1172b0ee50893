import os
import logging
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman
from flask_socketio import SocketIO
from werkzeug.exceptions import HTTPException
from config import config
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from jobboard.utils.exceptions import JobBoardError, InternalError, UnauthenticatedError

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
bcrypt = Bcrypt()
# Storage and default limits come from RATELIMIT_* config keys
limiter = Limiter(key_func=get_remote_address)
socketio = SocketIO()


def init_sentry(app):
    """Initialize Sentry error tracking and performance monitoring"""
    sentry_dsn = app.config.get('SENTRY_DSN')

    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
            ],
            traces_sample_rate=0.1,
            release=os.environ.get('HEROKU_SLUG_COMMIT', 'unknown'),
            environment=app.config.get('FLASK_ENV', 'development'),
            # Don't send personally identifiable information
            send_default_pii=False,
        )
        app.logger.info('Sentry initialized')
    else:
        app.logger.info('Sentry DSN not configured - error tracking disabled')


def init_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)


def register_error_handlers(app):
    """Render every error as {'error': {message, type, details}}"""

    @app.errorhandler(JobBoardError)
    def handle_jobboard_error(error):
        if error.status_code >= 500:
            db.session.rollback()
            app.logger.error(f'{error.__class__.__name__}: {error.message}')
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({
            'error': {
                'message': error.description,
                'type': error.name.replace(' ', ''),
                'details': {},
            }
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()  # Rollback any failed database transactions
        app.logger.exception(f'Unhandled error: {error}')
        return jsonify(InternalError().to_dict()), 500


def create_app(config_name='default'):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    init_logging(app)
    # Initialize Sentry error tracking (do this early to catch initialization errors)
    init_sentry(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    limiter.init_app(app)

    socketio.init_app(
        app,
        message_queue=app.config['SOCKETIO_MESSAGE_QUEUE'],
        async_mode=app.config['SOCKETIO_ASYNC_MODE'],
        cors_allowed_origins=app.config['SOCKETIO_CORS_ORIGINS'],
        logger=app.debug,
        engineio_logger=app.debug
    )

    # Initialize Socket.IO event handlers and the push channel used by services
    from jobboard.services.socketio_manager import init_socketio_events, PushChannel
    init_socketio_events(socketio)
    app.extensions['push_channel'] = PushChannel(socketio)

    # Security headers (Talisman) - only in production
    if config_name == 'production':
        Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            strict_transport_security_max_age=31536000,  # 1 year
            content_security_policy={
                'default-src': "'none'",
                'connect-src': ["'self'", 'wss:'],
            },
            frame_options='DENY',
        )

    # Import all models for Flask-Migrate
    with app.app_context():
        from jobboard.models import user, job, application, notification, message

    @login_manager.unauthorized_handler
    def unauthorized():
        raise UnauthenticatedError()

    # Register blueprints
    from jobboard.blueprints.auth import auth_bp
    from jobboard.blueprints.jobs import jobs_bp
    from jobboard.blueprints.applications import applications_bp
    from jobboard.blueprints.notifications import notifications_bp
    from jobboard.blueprints.messages import messages_bp
    from jobboard.blueprints.recommendations import recommendations_bp
    from jobboard.blueprints.admin import admin_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(applications_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(messages_bp)
    app.register_blueprint(recommendations_bp)
    app.register_blueprint(admin_bp)

    register_error_handlers(app)

    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables without running migrations"""
        db.create_all()
        print('Database tables created.')

    # Health check endpoint for monitoring and load balancers
    @app.route('/health')
    @limiter.exempt
    def health_check():
        """Health check endpoint - returns 200 if app is healthy"""
        health_status = {
            'status': 'healthy',
            'version': os.environ.get('HEROKU_RELEASE_VERSION', 'unknown'),
            'environment': app.config.get('FLASK_ENV', 'development')
        }

        try:
            from sqlalchemy import text
            db.session.execute(text('SELECT 1'))
            health_status['database'] = 'connected'
        except Exception as e:
            health_status['status'] = 'unhealthy'
            health_status['database'] = f'error: {str(e)}'
            return jsonify(health_status), 500

        if app.config.get('SOCKETIO_MESSAGE_QUEUE'):
            try:
                from redis import Redis
                Redis.from_url(app.config['SOCKETIO_MESSAGE_QUEUE']).ping()
                health_status['redis'] = 'connected'
            except Exception as e:
                health_status['status'] = 'unhealthy'
                health_status['redis'] = f'error: {str(e)}'
                return jsonify(health_status), 500

        return jsonify(health_status), 200

    return app
