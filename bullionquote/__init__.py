"""Flask application factory."""
import os

from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

from config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()


def create_app(config_name=None, config_overrides=None):
    """Create and configure the Flask application.

    ``config_overrides`` is applied on top of the selected config class.
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    if config_name == 'production':
        missing = [name for name in app.config['REQUIRED_ENV'] if not os.environ.get(name)]
        if missing:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    from bullionquote.observability import init_logging
    init_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    from bullionquote.models.user import StaffUser

    @login_manager.user_loader
    def load_user(user_id):
        return StaffUser.get(user_id)

    @login_manager.request_loader
    def load_user_from_request(req):
        auth = req.authorization
        if auth is None or auth.type != 'basic':
            return None
        return StaffUser.authenticate(auth.username, auth.password)

    # Register blueprints
    from bullionquote.blueprints.auth import auth_bp
    from bullionquote.blueprints.admin import admin_bp
    from bullionquote.blueprints.settings import settings_bp
    from bullionquote.blueprints.customer import customer_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(settings_bp, url_prefix='/admin/settings')
    app.register_blueprint(customer_bp, url_prefix='/quote')

    # Error handlers
    from bullionquote.blueprints.errors import register_error_handlers
    register_error_handlers(app)

    from bullionquote.cli import register_cli
    register_cli(app)

    @app.after_request
    def log_request(response):
        app.logger.info('%s %s %s', request.method, request.path, response.status_code)
        return response

    # Ignore "already exists" so multiple workers or an existing DB don't crash the app.
    with app.app_context():
        from bullionquote import models  # noqa: F401
        try:
            db.create_all()
        except Exception as e:
            if "already exists" in str(e).lower() or "duplicate key" in str(e).lower():
                app.logger.debug('Tables already present: %s', e)
            else:
                raise

    return app
