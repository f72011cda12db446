"""create leads table

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEAD_CATEGORIES = (
    'rental_inquiry',
    'maintenance',
    'viewing_request',
    'visitor_entry',
    'payment',
    'general',
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'leads',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('phone', sa.String(40), nullable=False),
        sa.Column('to_number', sa.String(40), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('message_sid', sa.String(64), nullable=True),
        sa.Column('category', sa.Enum(*LEAD_CATEGORIES, name='lead_category'), nullable=False),
        sa.Column('urgency', sa.Integer(), nullable=False),
        sa.Column('suggested_response', sa.Text(), nullable=True),
        sa.Column('status', sa.String(40), nullable=False, server_default='new'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('urgency BETWEEN 1 AND 5', name='ck_leads_urgency_range'),
    )
    op.create_index(op.f('ix_leads_id'), 'leads', ['id'], unique=False)
    op.create_index(op.f('ix_leads_phone'), 'leads', ['phone'], unique=False)
    op.create_index(op.f('ix_leads_message_sid'), 'leads', ['message_sid'], unique=False)
    op.create_index(op.f('ix_leads_status'), 'leads', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_leads_status'), table_name='leads')
    op.drop_index(op.f('ix_leads_message_sid'), table_name='leads')
    op.drop_index(op.f('ix_leads_phone'), table_name='leads')
    op.drop_index(op.f('ix_leads_id'), table_name='leads')
    op.drop_table('leads')
    sa.Enum(name='lead_category').drop(op.get_bind(), checkfirst=True)
