# main.py
"""
Student Records module
Flask application factory
"""

import os
import logging
from flask import Flask, render_template_string

# --- local modules ---
from config import config as config_by_name
from csrf_tokens import CsrfTokenManager
from db_single import init_database, PersistenceError
from init_db import run_on_startup
from cli_commands import register_cli_commands
from student_routes import student_bp


def create_app(config_name=None) -> Flask:
    """Create the application for the given config name (development, production, testing)"""
    config_name = config_name or os.environ.get('APP_ENV', 'default')
    config_class = config_by_name[config_name]

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Logging
    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))
    logger = logging.getLogger(__name__)

    # DB init
    engine, session_factory = init_database(config_class())
    if not run_on_startup(engine):
        logger.warning("[WARNING] Database initialization had issues, continuing with existing state")

    # CLI
    register_cli_commands(app)

    # Student blueprint
    app.register_blueprint(student_bp)
    logger.info("✅ Student blueprint registered")

    csrf_tokens = CsrfTokenManager.from_config(app.config)

    @app.context_processor
    def inject_csrf_token():
        return {'csrf_token': csrf_tokens.get_token}

    @app.errorhandler(404)
    def nf(_):
        return (
            render_template_string(
                "<h1>404</h1><p>Not found.</p><p><a href='/etudiant/'>Students</a></p>"
            ),
            404,
        )

    @app.errorhandler(PersistenceError)
    def persistence_failed(e):
        logger.error(f"❌ Persistence failure: {e}")
        return (
            render_template_string(
                "<h1>500</h1><p>Internal error.</p><p><a href='/etudiant/'>Students</a></p>"
            ),
            500,
        )

    return app


if __name__ == "__main__":
    create_app().run(debug=True, host="0.0.0.0", port=5000)
