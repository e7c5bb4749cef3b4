"""
Esquema inicial do laboratório de calibração

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2026-10-17 09:12:31.204118

Cria usuários, catálogo de permissões (módulos, permissões, concessões),
clientes, fornecedores, certificados, padrões e documentos. O conteúdo do
catálogo não é semeado aqui: a aplicação o sincroniza na inicialização.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def _registration_columns(cnpj_nullable: bool):
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('cnpj', sa.String(length=18), nullable=cnpj_nullable),
        sa.Column('email', sa.String(length=255), nullable=cnpj_nullable),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=2), nullable=True),
        sa.Column('zip_code', sa.String(length=10), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
    ]


def upgrade() -> None:
    # === Usuários e permissões ===
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_status', 'users', ['status'])

    op.create_table(
        'permission_modules',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_permission_modules'),
        sa.UniqueConstraint('name', name='uq_permission_modules_name'),
    )

    op.create_table(
        'permissions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('code', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('module_id', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['module_id'], ['permission_modules.id'], name='fk_permissions_module_id_permission_modules', ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name='pk_permissions'),
    )
    op.create_index('ix_permissions_code', 'permissions', ['code'], unique=True)
    op.create_index('ix_permissions_module_id', 'permissions', ['module_id'])

    op.create_table(
        'user_permissions',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('permission_id', sa.Uuid(), nullable=False),
        sa.Column('granted_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_user_permissions_user_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['permission_id'], ['permissions.id'], name='fk_user_permissions_permission_id_permissions', ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('user_id', 'permission_id', name='pk_user_permissions'),
    )

    # === Cadastros ===
    op.create_table(
        'clients',
        *_registration_columns(cnpj_nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_clients'),
    )
    op.create_index('ix_clients_name', 'clients', ['name'])
    op.create_index('ix_clients_cnpj', 'clients', ['cnpj'], unique=True)

    op.create_table(
        'suppliers',
        *_registration_columns(cnpj_nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_suppliers'),
    )
    op.create_index('ix_suppliers_name', 'suppliers', ['name'])
    op.create_index('ix_suppliers_cnpj', 'suppliers', ['cnpj'], unique=True)

    # === Entidades com vencimento ===
    op.create_table(
        'certificates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('certificate_number', sa.String(length=100), nullable=False),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('equipment_name', sa.String(length=255), nullable=False),
        sa.Column('serial_number', sa.String(length=100), nullable=True),
        sa.Column('calibration_date', sa.Date(), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('technician_id', sa.Uuid(), nullable=True),
        sa.Column('temperature', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('humidity', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('observations', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], name='fk_certificates_client_id_clients', ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['technician_id'], ['users.id'], name='fk_certificates_technician_id_users', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_certificates'),
    )
    op.create_index('ix_certificates_certificate_number', 'certificates', ['certificate_number'], unique=True)
    op.create_index('ix_certificates_client_id', 'certificates', ['client_id'])
    op.create_index('ix_certificates_expiration_date', 'certificates', ['expiration_date'])
    op.create_index('ix_certificates_status', 'certificates', ['status'])

    op.create_table(
        'standards',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('identification', sa.String(length=100), nullable=True),
        sa.Column('serial_number', sa.String(length=100), nullable=True),
        sa.Column('type', sa.String(length=100), nullable=True),
        sa.Column('calibration_date', sa.Date(), nullable=True),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('observations', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_standards'),
    )
    op.create_index('ix_standards_identification', 'standards', ['identification'])
    op.create_index('ix_standards_expiration_date', 'standards', ['expiration_date'])
    op.create_index('ix_standards_status', 'standards', ['status'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('version', sa.String(length=20), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('approved_by', sa.String(length=150), nullable=True),
        sa.Column('approval_date', sa.Date(), nullable=True),
        sa.Column('review_date', sa.Date(), nullable=True),
        sa.Column('next_review_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_documents'),
    )
    op.create_index('ix_documents_category', 'documents', ['category'])
    op.create_index('ix_documents_next_review_date', 'documents', ['next_review_date'])
    op.create_index('ix_documents_status', 'documents', ['status'])


def downgrade() -> None:
    for table in ('documents', 'standards', 'certificates', 'suppliers', 'clients',
                  'user_permissions', 'permissions', 'permission_modules', 'users'):
        op.drop_table(table)
