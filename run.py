import os
from prompt_store import create_app
from prompt_store.extensions import db
from prompt_store.cli.prompt_commands import init_prompt_commands

# Create the Flask app instance using the application factory
# It will load the config based on FLASK_CONFIG or default to 'development'
config_name = os.getenv('FLASK_CONFIG') or 'default'
app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for `flask shell` command."""
    from prompt_store.models.prompt import Prompt
    from prompt_store.services.prompt_service import get_store
    return {'db': db, 'Prompt': Prompt, 'store': get_store()}


@app.cli.command('create-db')
def create_db_command():
    """Creates the database tables."""
    db.create_all()
    print('Database tables created.')


# Register modular CLI commands
init_prompt_commands(app)
