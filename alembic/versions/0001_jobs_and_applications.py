"""Add jobs, applications and status history tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('recruiter_id', sa.String(length=255), nullable=False),
        sa.Column('company_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=150), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('application_deadline', sa.DateTime(), nullable=False),
        sa.Column('total_applications', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_jobs_recruiter_id', 'jobs', ['recruiter_id'], unique=False)
    op.create_index('ix_jobs_company_id', 'jobs', ['company_id'], unique=False)
    op.create_index('ix_jobs_status', 'jobs', ['status'], unique=False)

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('seeker_id', sa.String(length=255), nullable=False),
        sa.Column('recruiter_id', sa.String(length=255), nullable=False),
        sa.Column('company_id', sa.String(length=255), nullable=False),
        sa.Column('resume_url', sa.String(length=2048), nullable=False),
        sa.Column('resume_original_name', sa.String(length=255), nullable=True),
        sa.Column('cover_letter', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='applied'),
        sa.Column('interview_details', sa.JSON(), nullable=True),
        sa.Column('recruiter_notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('rating', sa.SmallInteger(), nullable=True),
        sa.Column('applied_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id', 'seeker_id', name='uq_applications_job_seeker')
    )
    op.create_index('ix_applications_job_id', 'applications', ['job_id'], unique=False)
    op.create_index('ix_applications_seeker_id', 'applications', ['seeker_id'], unique=False)
    op.create_index('ix_applications_recruiter_id', 'applications', ['recruiter_id'], unique=False)
    op.create_index('ix_applications_company_id', 'applications', ['company_id'], unique=False)
    op.create_index('ix_applications_status', 'applications', ['status'], unique=False)
    op.create_index('ix_applications_applied_at', 'applications', ['applied_at'], unique=False)

    op.create_table(
        'application_status_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('application_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('changed_at', sa.DateTime(), nullable=False),
        sa.Column('changed_by', sa.String(length=255), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=False, server_default=''),
        sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_application_status_history_application_id',
        'application_status_history',
        ['application_id'],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index('ix_application_status_history_application_id', table_name='application_status_history')
    op.drop_table('application_status_history')
    op.drop_index('ix_applications_applied_at', table_name='applications')
    op.drop_index('ix_applications_status', table_name='applications')
    op.drop_index('ix_applications_company_id', table_name='applications')
    op.drop_index('ix_applications_recruiter_id', table_name='applications')
    op.drop_index('ix_applications_seeker_id', table_name='applications')
    op.drop_index('ix_applications_job_id', table_name='applications')
    op.drop_table('applications')
    op.drop_index('ix_jobs_status', table_name='jobs')
    op.drop_index('ix_jobs_company_id', table_name='jobs')
    op.drop_index('ix_jobs_recruiter_id', table_name='jobs')
    op.drop_table('jobs')
