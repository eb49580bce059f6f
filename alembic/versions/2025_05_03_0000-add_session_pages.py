"""add session pages

Revision ID: e93b1f4a7c08
Revises: c27d9e05f6a1
Create Date: 2025-05-03 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'e93b1f4a7c08'
down_revision: Union[str, Sequence[str], None] = 'c27d9e05f6a1'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table('reading_sessions') as batch_op:
        batch_op.add_column(sa.Column('pages_read', sa.Integer(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table('reading_sessions') as batch_op:
        batch_op.drop_column('pages_read')
