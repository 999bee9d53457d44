"""Create users, dashboards and stars tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('login', sa.String(190), nullable=True),
        sa.Column('org_id', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('is_service_account', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_login', 'users', ['login'], unique=True)
    op.create_index('ix_users_org_id', 'users', ['org_id'])

    op.create_table(
        'dashboards',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('uid', sa.String(40), nullable=False),
        sa.Column('org_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('org_id', 'uid', name='uq_dashboard_org_uid'),
    )
    op.create_index('ix_dashboards_uid', 'dashboards', ['uid'])
    op.create_index('ix_dashboards_org_id', 'dashboards', ['org_id'])

    op.create_table(
        'stars',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('dashboard_id', sa.Integer(), nullable=True),
        sa.Column('dashboard_uid', sa.String(40), nullable=True),
        sa.Column('org_id', sa.Integer(), nullable=True),
        sa.Column('updated', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'dashboard_id', name='uq_star_user_dashboard_id'),
        sa.UniqueConstraint('user_id', 'dashboard_uid', 'org_id', name='uq_star_user_dashboard_uid_org'),
    )
    op.create_index('ix_stars_user_id', 'stars', ['user_id'])


def downgrade():
    op.drop_table('stars')
    op.drop_table('dashboards')
    op.drop_table('users')
