"""create prompts table

Revision ID: 001_create_prompts
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_prompts'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    is_postgres = op.get_bind().dialect.name == 'postgresql'

    # gen_random_uuid() lives in pgcrypto before PostgreSQL 13
    if is_postgres:
        op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        'prompts',
        sa.Column(
            'id',
            sa.Uuid(),
            nullable=False,
            server_default=sa.text('gen_random_uuid()') if is_postgres else None,
        ),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=True,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade():
    op.drop_table('prompts')
