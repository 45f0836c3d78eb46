"""create_profile_and_access_token_tables

Revision ID: 3c1f0a7d2b9e
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d2b9e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'profiles',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('token', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('current_position', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('company_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('company_status', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('experience', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('skills', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('education', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('achievements', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('goals', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email_sent_to', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('token'),
    )
    op.create_index(op.f('ix_profiles_token'), 'profiles', ['token'], unique=False)
    op.create_index(op.f('ix_profiles_submitted_at'), 'profiles', ['submitted_at'], unique=False)
    op.create_index(
        'ix_profiles_email_sent_to_submitted_at', 'profiles', ['email_sent_to', 'submitted_at'], unique=False
    )

    op.create_table(
        'access_tokens',
        sa.Column('token', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('recipient_email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('used', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('token'),
    )
    op.create_index(op.f('ix_access_tokens_recipient_email'), 'access_tokens', ['recipient_email'], unique=False)
    op.create_index(op.f('ix_access_tokens_expires_at'), 'access_tokens', ['expires_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_access_tokens_expires_at'), table_name='access_tokens')
    op.drop_index(op.f('ix_access_tokens_recipient_email'), table_name='access_tokens')
    op.drop_table('access_tokens')
    op.drop_index('ix_profiles_email_sent_to_submitted_at', table_name='profiles')
    op.drop_index(op.f('ix_profiles_submitted_at'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_token'), table_name='profiles')
    op.drop_table('profiles')
