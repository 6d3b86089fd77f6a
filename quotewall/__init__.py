"""
Quote Wall - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging

from flask import Flask, g, render_template
from quotewall.extensions import db, login_manager
from quotewall.config import Config
from quotewall.logging_config import setup_logging
from quotewall.sessions import DatabaseSessionInterface

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    setup_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'

    # Session data lives in the sessions table, keyed by the cookie's id
    app.session_interface = DatabaseSessionInterface()

    # Register blueprints
    from quotewall.auth import auth_bp
    from quotewall.admin import admin_bp
    from quotewall.quotes import quotes_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(quotes_bp)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from quotewall.models import User
        return db.session.get(User, int(user_id))

    # Request-scoped viewer, shared by the gates and the templates
    @app.before_request
    def attach_viewer():
        from quotewall.auth.access import load_viewer
        g.viewer = load_viewer()

    @app.context_processor
    def inject_viewer():
        from quotewall.auth.access import Tier, current_viewer
        return dict(viewer=current_viewer(), Tier=Tier)

    _register_error_handlers(app)

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and \
                not app.config['SQLALCHEMY_DATABASE_URI'].endswith(':memory:'):
            import os
            os.makedirs(os.path.join(Config.basedir, 'instance'), exist_ok=True)
        db.create_all()
        logger.debug('Database tables ready')

    return app


def _register_error_handlers(app):
    from quotewall.errors import QuoteWallError

    @app.errorhandler(QuoteWallError)
    def handle_quotewall_error(error):
        return render_template('errors/error.html', error=error), error.status_code
