"""create_moderation_tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 10:12:41.503117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('roles', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('warning_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('ban_reason', sa.String(length=500), nullable=True),
        sa.Column('banned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('user_id'),
    )
    op.create_index('idx_users_email', 'users', ['email'])
    op.create_index('idx_users_status', 'users', ['status'])

    op.create_table(
        'user_warnings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('reason', sa.String(length=500), nullable=False),
        sa.Column('acknowledged', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], name='fk_user_warnings_user_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('idx_user_warnings_user_id', 'user_warnings', ['user_id'])

    op.create_table(
        'user_reports',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('reporter_id', sa.String(length=36), nullable=True),
        sa.Column('reported_user_id', sa.String(length=36), nullable=True),
        sa.Column('reason', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='open'),
        sa.Column('resolution', sa.String(length=1000), nullable=True),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['reporter_id'], ['users.user_id'], name='fk_user_reports_reporter_id', onupdate='CASCADE', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['reported_user_id'], ['users.user_id'], name='fk_user_reports_reported_user_id', onupdate='CASCADE', ondelete='SET NULL'),
    )
    op.create_index('idx_user_reports_status', 'user_reports', ['status'])
    op.create_index('idx_user_reports_reported_user_id', 'user_reports', ['reported_user_id'])

    # Audit trail: target_id may be a user or a report, so no foreign key
    op.create_table(
        'admin_actions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('admin_id', sa.String(length=36), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('target_type', sa.String(length=20), nullable=False),
        sa.Column('target_id', sa.String(length=36), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_admin_actions_admin_id', 'admin_actions', ['admin_id'])
    op.create_index('idx_admin_actions_target', 'admin_actions', ['target_type', 'target_id'])
    op.create_index('idx_admin_actions_created_at', 'admin_actions', ['created_at'])
    op.create_index('idx_admin_actions_action', 'admin_actions', ['action'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('admin_actions')
    op.drop_table('user_reports')
    op.drop_table('user_warnings')
    op.drop_table('users')
