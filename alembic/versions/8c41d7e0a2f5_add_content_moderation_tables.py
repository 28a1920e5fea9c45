"""add_content_moderation_tables

Revision ID: 8c41d7e0a2f5
Revises: 3f9a1c2b7d10
Create Date: 2026-10-20 14:03:17.228940

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c41d7e0a2f5'
down_revision: Union[str, Sequence[str], None] = '3f9a1c2b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'content_assets',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='photo'),
        sa.Column('url', sa.String(length=1000), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('reason', sa.String(length=500), nullable=True),
        sa.Column('review_note', sa.String(length=1000), nullable=True),
        sa.Column('reviewed_by', sa.String(length=36), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], name='fk_content_assets_user_id', onupdate='CASCADE', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewed_by'], ['users.user_id'], name='fk_content_assets_reviewed_by', onupdate='CASCADE', ondelete='SET NULL'),
    )
    op.create_index('idx_content_assets_status', 'content_assets', ['status'])
    op.create_index('idx_content_assets_user_id', 'content_assets', ['user_id'])

    op.create_table(
        'profiles',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('primary_photo_idx', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('user_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], name='fk_profiles_user_id', onupdate='CASCADE', ondelete='CASCADE'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('profiles')
    op.drop_table('content_assets')
