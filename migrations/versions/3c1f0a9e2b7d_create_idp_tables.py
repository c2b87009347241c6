"""create_idp_tables

Revision ID: 3c1f0a9e2b7d
Revises:
Create Date: 2025-03-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3c1f0a9e2b7d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'appraisal_sources',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('employee_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('manager_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('sheet_url', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_appraisal_sources_employee_id'), 'appraisal_sources', ['employee_id'], unique=False)
    op.create_index(op.f('ix_appraisal_sources_manager_id'), 'appraisal_sources', ['manager_id'], unique=False)

    op.create_table(
        'idps',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('appraisal_source_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_by', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('updated_by', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['appraisal_source_id'], ['appraisal_sources.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_idps_appraisal_source_id'), 'idps', ['appraisal_source_id'], unique=False)
    op.create_index(op.f('ix_idps_status'), 'idps', ['status'], unique=False)

    op.create_table(
        'skills',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('idp_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['idp_id'], ['idps.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_skills_idp_id'), 'skills', ['idp_id'], unique=False)
    op.create_index(op.f('ix_skills_type'), 'skills', ['type'], unique=False)

    op.create_table(
        'skill_development_plan',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('skill_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('plan_info', sa.JSON(), nullable=False),
        sa.Column('progress', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    # Unique: at most one plan per skill, even under concurrent first access
    op.create_index(op.f('ix_skill_development_plan_skill_id'), 'skill_development_plan', ['skill_id'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_skill_development_plan_skill_id'), table_name='skill_development_plan')
    op.drop_table('skill_development_plan')
    op.drop_index(op.f('ix_skills_type'), table_name='skills')
    op.drop_index(op.f('ix_skills_idp_id'), table_name='skills')
    op.drop_table('skills')
    op.drop_index(op.f('ix_idps_status'), table_name='idps')
    op.drop_index(op.f('ix_idps_appraisal_source_id'), table_name='idps')
    op.drop_table('idps')
    op.drop_index(op.f('ix_appraisal_sources_manager_id'), table_name='appraisal_sources')
    op.drop_index(op.f('ix_appraisal_sources_employee_id'), table_name='appraisal_sources')
    op.drop_table('appraisal_sources')
