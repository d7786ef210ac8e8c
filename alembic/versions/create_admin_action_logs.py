"""create admin action logs

Revision ID: 8c41f0e5a7b2
Revises: 3b7e1c2a9d40
Create Date: 2026-10-19 10:31:05

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c41f0e5a7b2'
down_revision: Union[str, Sequence[str], None] = '3b7e1c2a9d40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


admin_action = sa.Enum(
    'APPROVE_ANNOUNCEMENT',
    'REJECT_ANNOUNCEMENT',
    'CREATE_CLUB',
    'ASSIGN_CLUB_HEAD',
    name='admin_action',
)


def upgrade() -> None:
    op.create_table(
        'admin_action_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=False),
        sa.Column('action', admin_action, nullable=False),
        sa.Column('target_type', sa.String(length=30), nullable=False),
        sa.Column('target_id', sa.Integer(), nullable=True),
        sa.Column('before_state', sa.String(length=50), nullable=True),
        sa.Column('after_state', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('admin_action_logs')
    admin_action.drop(op.get_bind(), checkfirst=True)
