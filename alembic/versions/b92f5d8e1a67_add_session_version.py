"""add_session_version

Revision ID: b92f5d8e1a67
Revises: 7d41b0e6c9a3
Create Date: 2026-10-14 09:03:27.104562

"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op


# revision identifiers, used by Alembic.
revision: str = 'b92f5d8e1a67'
down_revision: Union[str, None] = '7d41b0e6c9a3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table('parking_sessions', schema=None) as batch_op:
        batch_op.add_column(sa.Column('version', sa.Integer(), nullable=False, server_default='1'))


def downgrade() -> None:
    with op.batch_alter_table('parking_sessions', schema=None) as batch_op:
        batch_op.drop_column('version')
