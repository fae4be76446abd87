"""create users and employees

Revision ID: 3a1c9e07b2d4
Revises:
Create Date: 2026-10-19 09:12:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1c9e07b2d4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'employees',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column(
            'owner_id',
            sa.String(length=32),
            sa.ForeignKey('users.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=False),
        sa.Column('salary', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('salary >= 0', name='employees_salary_non_negative'),
    )
    op.create_index('ix_employees_owner_id', 'employees', ['owner_id'])
    op.create_index(
        'employees_user_email_lower_unique',
        'employees',
        ['owner_id', sa.text('lower(email)')],
        unique=True,
    )


def downgrade():
    op.drop_index('employees_user_email_lower_unique', table_name='employees')
    op.drop_index('ix_employees_owner_id', table_name='employees')
    op.drop_table('employees')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
