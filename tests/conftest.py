import pytest
from prompt_store import create_app, db
from prompt_store.cli.prompt_commands import init_prompt_commands


@pytest.fixture(scope='function')
def app():
    """
    Fixture that creates a test app instance with a new database.
    """
    # create_app expects a config name (e.g., 'testing'), not a keyword arg
    app = create_app('testing')

    with app.app_context():
        # Create the database tables
        db.create_all()

        yield app

        # Teardown: drop all tables after tests are done
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def runner(app):
    """A CLI runner with the `prompts` command group registered."""
    init_prompt_commands(app)
    return app.test_cli_runner()


@pytest.fixture
def file_db_app(tmp_path):
    """An app backed by an on-disk SQLite file, for tests that need
    several connections (threads, migrations)."""
    db_path = tmp_path / 'prompts.db'
    app = create_app('testing', config_overrides={
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{db_path}',
        'SQLALCHEMY_ENGINE_OPTIONS': {'connect_args': {'timeout': 30}},
    })
    yield app
    with app.app_context():
        db.engine.dispose()
