from flask import Flask
from config import config
from .extensions import db, cache, migrate
from .logging_config import configure_logging
import os


def create_app(config_name=None, config_overrides=None):
    """
    Application factory function.

    ``config_overrides`` is applied on top of the selected config class,
    which lets callers point a single app at a different database.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_CONFIG', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        is_debug=app.config.get("DEBUG", False)
    )

    # Initialize extensions
    db.init_app(app)
    cache.init_app(app)
    # Schema revisions live in <repo>/migrations
    migrate.init_app(app, db, directory=os.path.join(os.path.dirname(app.root_path), 'migrations'))

    # Import models so the metadata knows about every table
    from .models import prompt  # noqa: F401

    return app
