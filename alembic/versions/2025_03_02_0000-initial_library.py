"""initial library

Revision ID: 5e1c0a7d2b90
Revises:
Create Date: 2025-03-02 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e1c0a7d2b90'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('author', sa.String(length=300), nullable=False),
        sa.Column('page_count', sa.Integer(), nullable=True),
        sa.Column('isbn', sa.String(length=17), nullable=True),
        sa.Column('cover_url', sa.String(length=500), nullable=True),
        sa.Column('publisher', sa.String(length=300), nullable=True),
        sa.Column('first_publish_year', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=10), nullable=False, server_default='eng'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('reading_status', sa.String(length=20), nullable=False, server_default='want_to_read'),
        sa.Column('current_page', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('date_started', sa.Date(), nullable=True),
        sa.Column('date_finished', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'reading_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('minutes_read', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reading_sessions_book_id', 'reading_sessions', ['book_id'])
    op.create_index('ix_reading_sessions_date', 'reading_sessions', ['date'])

    op.create_table(
        'user_preferences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False, server_default='Reader'),
        sa.Column('yearly_book_goal', sa.Integer(), nullable=True, server_default='12'),
        sa.Column('preferred_genres', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('user_preferences')
    op.drop_index('ix_reading_sessions_date', 'reading_sessions')
    op.drop_index('ix_reading_sessions_book_id', 'reading_sessions')
    op.drop_table('reading_sessions')
    op.drop_table('books')
