"""create_parking_sessions

Revision ID: 3c7e9a1f2b40
Revises:
Create Date: 2026-10-05 10:12:44.318207

"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3c7e9a1f2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'parking_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('plate', sa.String(20), nullable=False),
        sa.Column('zone', sa.String(100), nullable=False, server_default='General'),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('meter_id', sa.String(50), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('paid_minutes', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('payment_method', sa.String(50), nullable=False, server_default='cash'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('fine_reference', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_time > start_time', name='ck_parking_sessions_window'),
        sa.CheckConstraint('paid_minutes > 0', name='ck_parking_sessions_paid_minutes'),
    )
    op.create_index(op.f('ix_parking_sessions_plate'), 'parking_sessions', ['plate'], unique=False)
    op.create_index(op.f('ix_parking_sessions_end_time'), 'parking_sessions', ['end_time'], unique=False)
    op.create_index(op.f('ix_parking_sessions_status'), 'parking_sessions', ['status'], unique=False)
    op.create_index(op.f('ix_parking_sessions_created_at'), 'parking_sessions', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_parking_sessions_created_at'), table_name='parking_sessions')
    op.drop_index(op.f('ix_parking_sessions_status'), table_name='parking_sessions')
    op.drop_index(op.f('ix_parking_sessions_end_time'), table_name='parking_sessions')
    op.drop_index(op.f('ix_parking_sessions_plate'), table_name='parking_sessions')
    op.drop_table('parking_sessions')
