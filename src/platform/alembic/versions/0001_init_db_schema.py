"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2025-12-06

Schema:
- events: Events (all columns but id nullable, incomplete rows are skipped on read)
- spots: Seating spots of an event, `status` available/sold, `ticket_id` set when sold
- tickets: One ticket per sold spot

Note: events.date is stored as text `YYYY-MM-DD HH:MM:SS`
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        'events',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('organization', sa.String(length=255), nullable=True),
        sa.Column('rating', sa.String(length=20), nullable=True),
        sa.Column('date', sa.String(length=19), nullable=True),
        sa.Column('image_url', sa.String(length=512), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('partner_id', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_events_date'), 'events', ['date'], unique=False)

    op.create_table(
        'spots',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('ticket_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'name', name='uq_spot_event_name'),
    )
    op.create_index(op.f('ix_spots_event_id'), 'spots', ['event_id'], unique=False)

    op.create_table(
        'tickets',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('spot_id', sa.String(length=36), nullable=False),
        sa.Column('ticket_type', sa.String(length=10), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.ForeignKeyConstraint(['spot_id'], ['spots.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('spot_id'),
    )
    op.create_index(op.f('ix_tickets_event_id'), 'tickets', ['event_id'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_tickets_event_id'), table_name='tickets')
    op.drop_table('tickets')
    op.drop_index(op.f('ix_spots_event_id'), table_name='spots')
    op.drop_table('spots')
    op.drop_index(op.f('ix_events_date'), table_name='events')
    op.drop_table('events')
