"""iuran sync executions

Revision ID: 3c1d2e9a7b44
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = '3c1d2e9a7b44'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('iuransyncexecution',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('process_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('action', sa.Enum('SYNC_CURRENT_MONTH', 'GENERATE_MONTH', 'GENERATE_YEAR',
                                    name='iuransyncaction'), nullable=False),
        sa.Column('status', sa.Enum('RUNNING', 'COMPLETED', 'FAILED',
                                    name='iuransyncstatus'), nullable=False),
        sa.Column('month', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('result', sa.Text(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_iuransyncexecution_process_id'), 'iuransyncexecution', ['process_id'], unique=True)
    op.create_index(op.f('ix_iuransyncexecution_action'), 'iuransyncexecution', ['action'], unique=False)
    op.create_index(op.f('ix_iuransyncexecution_status'), 'iuransyncexecution', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_iuransyncexecution_status'), table_name='iuransyncexecution')
    op.drop_index(op.f('ix_iuransyncexecution_action'), table_name='iuransyncexecution')
    op.drop_index(op.f('ix_iuransyncexecution_process_id'), table_name='iuransyncexecution')
    op.drop_table('iuransyncexecution')
    sa.Enum(name='iuransyncstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='iuransyncaction').drop(op.get_bind(), checkfirst=True)
