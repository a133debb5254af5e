import sqlalchemy as sa
from flask_migrate import downgrade, upgrade

from prompt_store import db
from prompt_store.services.prompt_service import PromptStore


def test_upgrade_creates_prompts_schema(file_db_app):
    with file_db_app.app_context():
        upgrade()

        inspector = sa.inspect(db.engine)
        assert 'prompts' in inspector.get_table_names()
        columns = {c['name']: c for c in inspector.get_columns('prompts')}
        assert set(columns) == {'id', 'title', 'content', 'created_at'}
        assert columns['title']['nullable'] is False
        assert columns['content']['nullable'] is False
        assert inspector.get_pk_constraint('prompts')['constrained_columns'] == ['id']

        store = PromptStore(db.session)
        pid = store.create('Migrated', 'works').id
        assert store.get(pid).title == 'Migrated'
        db.session.remove()

        downgrade(revision='base')
        assert 'prompts' not in sa.inspect(db.engine).get_table_names()
