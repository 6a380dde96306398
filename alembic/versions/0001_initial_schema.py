"""initial schema: owners, pets, medical_consultations, access_tokens

Revision ID: 0001
Revises:
Create Date: 2025-11-10

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns():
    return [
        sa.Column('created_by', sa.String(36), nullable=True),
        sa.Column('updated_by', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'owners',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_salt', sa.String(64), nullable=False),
        sa.Column('password_hash', sa.String(128), nullable=False),
        sa.Column('address', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('photo_path', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='client'),
        sa.Column('status', sa.String(20), nullable=False, server_default='enabled'),
        *_audit_columns(),
        sa.Column('disabled_at', sa.DateTime(), nullable=True),
        sa.Column('disabled_by', sa.String(36), nullable=True),
    )
    op.create_index('ix_owners_role', 'owners', ['role'])

    op.create_table(
        'pets',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('species', sa.String(20), nullable=False),
        sa.Column('breed', sa.String(255), nullable=False),
        sa.Column('size', sa.String(20), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('vaccinated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('food_type', sa.String(255), nullable=False),
        sa.Column('photo_path', sa.String(255), nullable=True),
        sa.Column('last_vaccination', sa.Date(), nullable=True),
        sa.Column('owner_id', sa.String(36), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='enabled'),
        *_audit_columns(),
        sa.Column('disabled_at', sa.DateTime(), nullable=True),
        sa.Column('disabled_by', sa.String(36), nullable=True),
    )
    op.create_index('ix_pets_owner_id', 'pets', ['owner_id'])

    op.create_table(
        'medical_consultations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('pet_id', sa.String(36), sa.ForeignKey('pets.id'), nullable=False),
        sa.Column('client_id', sa.String(36), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('veterinarian_id', sa.String(36), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='PENDING'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_audit_columns(),
    )
    op.create_index('ix_medical_consultations_status', 'medical_consultations', ['status'])
    op.create_index('ix_consultations_veterinarian_scheduled', 'medical_consultations', ['veterinarian_id', 'scheduled_at'])
    op.create_index('ix_consultations_client_scheduled', 'medical_consultations', ['client_id', 'scheduled_at'])
    op.create_index('ix_consultations_pet_scheduled', 'medical_consultations', ['pet_id', 'scheduled_at'])

    op.create_table(
        'access_tokens',
        sa.Column('jti', sa.String(36), primary_key=True),
        sa.Column('owner_id', sa.String(36), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('issued_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_access_tokens_owner_id', 'access_tokens', ['owner_id'])


def downgrade() -> None:
    op.drop_index('ix_access_tokens_owner_id', table_name='access_tokens')
    op.drop_table('access_tokens')
    op.drop_index('ix_consultations_pet_scheduled', table_name='medical_consultations')
    op.drop_index('ix_consultations_client_scheduled', table_name='medical_consultations')
    op.drop_index('ix_consultations_veterinarian_scheduled', table_name='medical_consultations')
    op.drop_index('ix_medical_consultations_status', table_name='medical_consultations')
    op.drop_table('medical_consultations')
    op.drop_index('ix_pets_owner_id', table_name='pets')
    op.drop_table('pets')
    op.drop_index('ix_owners_role', table_name='owners')
    op.drop_table('owners')
