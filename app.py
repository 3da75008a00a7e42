import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException
from config import config
from extensions import db, migrate, login_manager, csrf, limiter
from utils.errors import ServiceError


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # File handler for errors
        file_handler = RotatingFileHandler(
            'logs/networth_tracker.log',
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Service modules log through their own module loggers
        logging.getLogger('services').addHandler(file_handler)
        logging.getLogger('services').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Net worth tracker startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('Net worth tracker startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # User loader callback for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from models.users import User
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({
            'status': 'fail',
            'message': 'You must be logged in to access this resource'
        }), 401

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models

    # Register blueprints
    from blueprints.auth import auth_bp
    from blueprints.financial_sources import financial_sources_bp
    from blueprints.source_updates import source_updates_bp
    from blueprints.networth import networth_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(financial_sources_bp)
    app.register_blueprint(source_updates_bp)
    app.register_blueprint(networth_bp)

    @app.route('/health')
    def health():
        return jsonify({'status': 'success', 'message': 'Server is running'})

    # Create database tables for local sqlite use; deployments run migrations
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and not app.testing:
        os.makedirs(app.instance_path, exist_ok=True)
        with app.app_context():
            db.create_all()

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def register_error_handlers(app):
    """Translate failures into the JSON error envelope"""

    @app.errorhandler(ServiceError)
    def service_error(error):
        if error.status_code >= 500:
            db.session.rollback()
            app.logger.error(f'Service error: {error.message}')
        return jsonify({'status': error.status, 'message': error.message}), error.status_code

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        return jsonify({
            'status': 'fail',
            'message': f'CSRF token validation failed: {error.description}'
        }), 400

    @app.errorhandler(HTTPException)
    def http_error(error):
        status = 'fail' if error.code < 500 else 'error'
        return jsonify({'status': status, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        app.logger.exception(f'Internal Server Error: {error}')
        return jsonify({'status': 'error', 'message': 'Something went wrong'}), 500


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.group()
    def networth():
        """Inspect and snapshot a user's net worth."""
        pass

    @networth.command('show')
    @click.argument('email')
    def show_networth(email):
        """Print current net worth for the user with EMAIL."""
        from models.users import User
        from services.networth_service import NetWorthService
        user = User.query.filter_by(email=email.lower()).first()
        if not user:
            click.echo(f'ERROR: No user found with email "{email}"', err=True)
            return
        value = NetWorthService.calculate_current_networth(user.id)
        click.echo(f'{user.name} ({email}): {value:,.2f}')

    @networth.command('snapshot')
    @click.argument('email')
    def snapshot_networth(email):
        """Record a MANUAL net worth event for the user with EMAIL."""
        from models.users import User
        from services.networth_event_service import NetWorthEventService
        user = User.query.filter_by(email=email.lower()).first()
        if not user:
            click.echo(f'ERROR: No user found with email "{email}"', err=True)
            return
        event = NetWorthEventService.record_snapshot(user.id)
        click.echo(f'SUCCESS: recorded {event.net_worth:,.2f} for "{user.name}" at {event.event_date:%Y-%m-%d %H:%M}')


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    app.run(host='127.0.0.1', port=5000, debug=True)
