"""create_jobly_tables

Creates companies, users, jobs and applications.

Revision ID: 4f2a9c1d7b3e
Revises:
Create Date: 2026-10-16 10:12:41.204817

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7b3e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'companies',
        sa.Column('handle', sa.String(25), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False, unique=True),
        sa.Column('num_employees', sa.Integer(), sa.CheckConstraint('num_employees >= 0'), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('logo_url', sa.Text(), nullable=True),
    )

    op.create_table(
        'users',
        sa.Column('username', sa.String(25), primary_key=True),
        sa.Column('password', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), sa.CheckConstraint("email LIKE '%_@_%'"), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('salary', sa.Integer(), sa.CheckConstraint('salary >= 0'), nullable=True),
        sa.Column('equity', sa.Numeric(), sa.CheckConstraint('equity <= 1.0'), nullable=True),
        sa.Column('company_handle', sa.String(25), nullable=False),
        sa.ForeignKeyConstraint(['company_handle'], ['companies.handle'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
    op.create_index(op.f('ix_jobs_title'), 'jobs', ['title'], unique=False)
    op.create_index(op.f('ix_jobs_company_handle'), 'jobs', ['company_handle'], unique=False)

    op.create_table(
        'applications',
        sa.Column('username', sa.String(25), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['username'], ['users.username'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('username', 'job_id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_index(op.f('ix_jobs_company_handle'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_title'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_id'), table_name='jobs')
    op.drop_table('jobs')
    op.drop_table('users')
    op.drop_table('companies')
