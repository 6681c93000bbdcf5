"""create organization, project, column and task tables

Revision ID: 001
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _soft_delete_columns() -> list:
    return [
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_by', sa.String(length=128), nullable=True),
    ]


def upgrade() -> None:
    """Create the task management tables with soft-delete columns."""

    # Organizations
    op.create_table(
        'organizations',
        sa.Column('id', postgresql.UUID(as_uuid=False), nullable=False, primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.String(length=128), nullable=False),
        *_soft_delete_columns(),
        *_timestamps(),
    )
    op.create_index('ix_organizations_owner_id', 'organizations', ['owner_id'])
    op.create_index('ix_organizations_deleted_at', 'organizations', ['deleted_at'])

    # Organization roles
    op.create_table(
        'organization_roles',
        sa.Column('id', postgresql.UUID(as_uuid=False), nullable=False, primary_key=True),
        sa.Column('organization_id', postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False, server_default='member'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_organization_roles_organization_id', 'organization_roles', ['organization_id'])
    op.create_index('ix_organization_roles_user_id', 'organization_roles', ['user_id'])
    op.create_index(
        'ix_organization_roles_org_user',
        'organization_roles',
        ['organization_id', 'user_id'],
        unique=True,
    )

    # Projects
    op.create_table(
        'projects',
        sa.Column('id', postgresql.UUID(as_uuid=False), nullable=False, primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.String(length=128), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=False), nullable=True),
        *_soft_delete_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_projects_owner_id', 'projects', ['owner_id'])
    op.create_index('ix_projects_organization_id', 'projects', ['organization_id'])
    op.create_index('ix_projects_deleted_at', 'projects', ['deleted_at'])

    # Board columns
    op.create_table(
        'columns',
        sa.Column('id', postgresql.UUID(as_uuid=False), nullable=False, primary_key=True),
        sa.Column('project_id', postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_columns_project_id', 'columns', ['project_id'])

    # Tasks
    op.create_table(
        'tasks',
        sa.Column('id', postgresql.UUID(as_uuid=False), nullable=False, primary_key=True),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='medium'),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('owner_id', sa.String(length=128), nullable=False),
        sa.Column('assignee_id', sa.String(length=128), nullable=True),
        sa.Column('project_id', postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column('column_id', postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column('organization_id', postgresql.UUID(as_uuid=False), nullable=True),
        *_soft_delete_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['column_id'], ['columns.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_tasks_owner_id', 'tasks', ['owner_id'])
    op.create_index('ix_tasks_assignee_id', 'tasks', ['assignee_id'])
    op.create_index('ix_tasks_project_id', 'tasks', ['project_id'])
    op.create_index('ix_tasks_organization_id', 'tasks', ['organization_id'])
    op.create_index('ix_tasks_deleted_at', 'tasks', ['deleted_at'])
    op.create_index('ix_tasks_project_deleted', 'tasks', ['project_id', 'deleted_at'])

    # Partial indexes for the expiry sweep: only soft-deleted rows are scanned
    for table in ('tasks', 'projects', 'organizations'):
        op.create_index(
            f'ix_{table}_expires_at_deleted',
            table,
            ['expires_at'],
            postgresql_where=sa.text('deleted_at IS NOT NULL'),
        )


def downgrade() -> None:
    """Drop the task management tables."""
    for table in ('tasks', 'projects', 'organizations'):
        op.drop_index(f'ix_{table}_expires_at_deleted', table_name=table)

    op.drop_table('tasks')
    op.drop_table('columns')
    op.drop_table('projects')
    op.drop_table('organization_roles')
    op.drop_table('organizations')
