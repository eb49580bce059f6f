"""add weekly progress

Revision ID: c27d9e05f6a1
Revises: 8a4f6c21e3d5
Create Date: 2025-04-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c27d9e05f6a1'
down_revision: Union[str, Sequence[str], None] = '8a4f6c21e3d5'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'weekly_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('weeks_passed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target_reading_minutes', sa.Integer(), nullable=False),
        sa.Column('achieved_reading_minutes', sa.Float(), nullable=False),
        sa.Column('date_created', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('weekly_progress')
