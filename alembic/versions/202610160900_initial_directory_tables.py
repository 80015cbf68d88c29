"""Initial directory tables

Revision ID: 202610160900
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '202610160900'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # ------------------------------
    # organizations
    # ------------------------------
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('external_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_organizations_external_id', 'organizations', ['external_id'], unique=True)

    # ------------------------------
    # users
    # ------------------------------
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('external_id', sa.String(64), nullable=True),
        sa.Column('organization_id', sa.String(36), sa.ForeignKey('organizations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('profile_id', sa.String(64), nullable=True),
        sa.Column('role_id', sa.String(64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])
    op.create_index('ix_users_org_role', 'users', ['organization_id', 'role_id'])

    # ------------------------------
    # crm_roles
    # ------------------------------
    op.create_table(
        'crm_roles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('external_id', sa.String(64), nullable=False),
        sa.Column('organization_id', sa.String(36), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('display_label', sa.String(255), nullable=False),
        sa.Column('reports_to_id', sa.String(64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_crm_roles_external_id', 'crm_roles', ['external_id'], unique=True)
    op.create_index('ix_crm_roles_organization_id', 'crm_roles', ['organization_id'])

    # ------------------------------
    # crm_profiles / crm_profile_permissions
    # ------------------------------
    op.create_table(
        'crm_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('external_id', sa.String(64), nullable=False),
        sa.Column('organization_id', sa.String(36), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('display_label', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_crm_profiles_external_id', 'crm_profiles', ['external_id'], unique=True)
    op.create_index('ix_crm_profiles_organization_id', 'crm_profiles', ['organization_id'])

    op.create_table(
        'crm_profile_permissions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('profile_id', sa.String(36), sa.ForeignKey('crm_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('external_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('module', sa.String(100), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint('profile_id', 'external_id', name='uq_profile_permission'),
    )
    op.create_index('ix_crm_profile_permissions_profile_id', 'crm_profile_permissions', ['profile_id'])
    op.create_index('ix_crm_profile_permissions_module', 'crm_profile_permissions', ['module'])

    # ------------------------------
    # crm_sharing_rules
    # ------------------------------
    op.create_table(
        'crm_sharing_rules',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('organization_id', sa.String(36), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('module_name', sa.String(100), nullable=False),
        sa.Column('share_type', sa.String(50), nullable=False),
        sa.Column('rule_data', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_crm_sharing_rules_organization_id', 'crm_sharing_rules', ['organization_id'])
    op.create_index('ix_sharing_rules_org_module', 'crm_sharing_rules', ['organization_id', 'module_name'])

    # ------------------------------
    # contacts
    # ------------------------------
    op.create_table(
        'contacts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('external_id', sa.String(64), nullable=True),
        sa.Column('first_name', sa.String(255), nullable=True),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('owner_external_id', sa.String(64), nullable=True),
        sa.Column('organization_id', sa.String(36), sa.ForeignKey('organizations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_contacts_external_id', 'contacts', ['external_id'], unique=True)
    op.create_index('ix_contacts_organization_id', 'contacts', ['organization_id'])
    op.create_index('ix_contacts_user_id', 'contacts', ['user_id'])


def downgrade() -> None:
    op.drop_table('contacts')
    op.drop_table('crm_sharing_rules')
    op.drop_table('crm_profile_permissions')
    op.drop_table('crm_profiles')
    op.drop_table('crm_roles')
    op.drop_table('users')
    op.drop_table('organizations')
