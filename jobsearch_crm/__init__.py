"""
Flask application factory for the job-search CRM.
"""
import logging
import os
from datetime import datetime

from flask import Flask, jsonify

logger = logging.getLogger(__name__)


def create_app(config_name='default'):
    """Create and configure the Flask application."""
    # Import these inside the function to avoid import-time side effects
    from jobsearch_crm.config import config, database_url, INSTANCE_DIR
    from jobsearch_crm.errors import register_error_handlers
    from jobsearch_crm.extensions import login_manager, migrate
    from jobsearch_crm.models import db, User
    from jobsearch_crm.models.base import isoformat
    from jobsearch_crm.utils.auth import load_user_from_request

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    logging.basicConfig(level=app.config['LOG_LEVEL'])

    # Config classes are evaluated at import time; re-read DATABASE_URL now
    # in case the platform injected it later
    if not app.config.get('TESTING'):
        app.config['SQLALCHEMY_DATABASE_URI'] = database_url(app.config['SQLALCHEMY_DATABASE_URI'])

    if not app.config.get('JWT_SECRET'):
        app.config['JWT_SECRET'] = app.config['SECRET_KEY']
    if not app.config['JWT_SECRET']:
        raise RuntimeError("Set JWT_SECRET or SECRET_KEY (or DATABASE_URL) before starting the app")

    # Log final DB type (not the full URL for security)
    db_uri = app.config['SQLALCHEMY_DATABASE_URI']
    db_type = 'postgresql' if 'postgresql' in db_uri else 'sqlite' if 'sqlite' in db_uri else 'unknown'
    logger.info(f"Config name: {config_name}, DB type: {db_type}")

    # sqlite databases live under instance/
    os.makedirs(INSTANCE_DIR, exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    login_manager.request_loader(load_user_from_request)

    # Register blueprints
    from jobsearch_crm.api import (
        auth_api, companies_api, contacts_api, communications_api, tasks_api,
        research_api, applications_api, export_api, import_api
    )

    app.register_blueprint(auth_api.bp)
    app.register_blueprint(companies_api.bp)
    app.register_blueprint(contacts_api.bp)
    app.register_blueprint(communications_api.bp)
    app.register_blueprint(tasks_api.bp)
    app.register_blueprint(research_api.bp)
    app.register_blueprint(applications_api.bp)
    app.register_blueprint(export_api.bp)
    app.register_blueprint(import_api.bp)

    register_error_handlers(app)

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok', 'timestamp': isoformat(datetime.utcnow())})

    # Database initialization
    @app.before_request
    def ensure_tables():
        """Ensure database tables exist."""
        if not hasattr(app, '_db_initialized'):
            db.create_all()
            app._db_initialized = True

    return app


# NOTE: Do NOT create app at module level!
# The app must be created at runtime (not import time) so platform
# environment variables are available. Use wsgi.py as the entry point.
