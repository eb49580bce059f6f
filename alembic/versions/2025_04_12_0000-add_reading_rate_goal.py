"""add reading rate goal

Revision ID: 8a4f6c21e3d5
Revises: 5e1c0a7d2b90
Create Date: 2025-04-12 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8a4f6c21e3d5'
down_revision: Union[str, Sequence[str], None] = '5e1c0a7d2b90'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

GOAL_COLUMNS = [
    ('weekly_reading_goal', sa.Integer()),
    ('initial_reading_rate_minutes_per_day', sa.Integer()),
    ('end_reading_rate_goal_minutes_per_day', sa.Integer()),
    ('end_reading_rate_goal_date', sa.DateTime()),
    ('current_reading_rate_minutes_per_day', sa.Integer()),
    ('current_reading_rate_last_updated', sa.DateTime()),
    ('weekly_reading_rate_increase_minutes', sa.Integer()),
    ('weekly_reading_rate_increase_percentage', sa.Float()),
]


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table('user_preferences') as batch_op:
        for name, type_ in GOAL_COLUMNS:
            batch_op.add_column(sa.Column(name, type_, nullable=True))


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('user_preferences') as batch_op:
        for name, _ in reversed(GOAL_COLUMNS):
            batch_op.drop_column(name)
