"""Create users, financial sources, balance updates and net worth events

Revision ID: 4a7c2e91b3d0
Revises:
Create Date: 2026-10-17 09:12:44.120391

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4a7c2e91b3d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('failed_login_attempts', sa.Integer(), nullable=False),
        sa.Column('locked_until', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table('financial_sources',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('institution', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color_code', sa.String(length=7), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_financial_sources_user_id'), 'financial_sources', ['user_id'], unique=False)

    op.create_table('financial_source_updates',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('financial_source_id', sa.String(length=36), nullable=False),
        sa.Column('balance', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['financial_source_id'], ['financial_sources.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_financial_source_updates_financial_source_id'), 'financial_source_updates',
                    ['financial_source_id'], unique=False)

    op.create_table('net_worth_events',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('net_worth', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('event_type', sa.String(length=30), nullable=False),
        sa.Column('event_date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_net_worth_events_user_date', 'net_worth_events', ['user_id', 'event_date'], unique=False)


def downgrade():
    # Children before parents
    op.drop_index('idx_net_worth_events_user_date', table_name='net_worth_events')
    op.drop_table('net_worth_events')
    op.drop_index(op.f('ix_financial_source_updates_financial_source_id'), table_name='financial_source_updates')
    op.drop_table('financial_source_updates')
    op.drop_index(op.f('ix_financial_sources_user_id'), table_name='financial_sources')
    op.drop_table('financial_sources')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
