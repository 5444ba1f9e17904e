"""add_parking_zones

Revision ID: 7d41b0e6c9a3
Revises: 3c7e9a1f2b40
Create Date: 2026-10-08 16:40:02.551893

"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '7d41b0e6c9a3'
down_revision: Union[str, None] = '3c7e9a1f2b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'parking_zones',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('max_minutes', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_parking_zones_is_active'), 'parking_zones', ['is_active'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_parking_zones_is_active'), table_name='parking_zones')
    op.drop_table('parking_zones')
