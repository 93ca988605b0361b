"""initial_schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_OWNER_CONDITION = "status IN ('pending', 'verified') AND NOT admin_curated"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('role', sa.Enum('user', 'admin', name='userrole'), nullable=False),
        sa.Column('mobile', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column('reset_token', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('reset_token_expiry', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_reset_token'), 'users', ['reset_token'], unique=False)

    op.create_table(
        'talent_applications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('status', sa.Enum('pending', 'verified', 'rejected', name='applicationstatus'), nullable=False),
        sa.Column('admin_curated', sa.Boolean(), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('birth_year', sa.Integer(), nullable=False),
        sa.Column('city', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('nickname', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('bio', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('social_channels', sa.Text(), nullable=False),
        sa.Column('social_links', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('media_kit_urls', sa.Text(), nullable=False),
        sa.Column('content_categories', sa.Text(), nullable=False),
        sa.Column('available_for_products', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('shipping_address', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('available_for_reels', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('available_next_3_months', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('availability_period', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('collaborated_agencies', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('agencies_list', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('collaborated_brands', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('brands_list', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('has_vat', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('payment_methods', sa.Text(), nullable=False),
        sa.Column('terms_accepted', sa.Boolean(), nullable=False),
        sa.Column('price', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('is_celebrity', sa.Boolean(), nullable=False),
        sa.Column('click_count', sa.Integer(), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.Uuid(), nullable=True),
        sa.Column('review_notes', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_talent_applications_user_id'), 'talent_applications', ['user_id'], unique=False)
    op.create_index(op.f('ix_talent_applications_status'), 'talent_applications', ['status'], unique=False)
    op.create_index(
        'uq_talent_applications_active_owner',
        'talent_applications',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text(ACTIVE_OWNER_CONDITION),
        sqlite_where=sa.text(ACTIVE_OWNER_CONDITION),
    )

    op.create_table(
        'media_uploads',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('talent_id', sa.Uuid(), nullable=True),
        sa.Column('filename', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('original_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('url', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('provider_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('storage_backend', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['talent_id'], ['talent_applications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider_id'),
    )
    op.create_index(op.f('ix_media_uploads_user_id'), 'media_uploads', ['user_id'], unique=False)
    op.create_index(op.f('ix_media_uploads_talent_id'), 'media_uploads', ['talent_id'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('user_email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('user_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('phone_number', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('time_slot_date', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('time_slot_time', sqlmodel.sql.sqltypes.AutoString(length=8), nullable=False),
        sa.Column('time_slot_datetime', sa.DateTime(), nullable=False),
        sa.Column('talents', sa.Text(), nullable=False),
        sa.Column('price_range', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('user_idea', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('pending_confirmation', 'confirmed', 'completed', 'cancelled', name='bookingstatus'),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_bookings_status'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_user_id'), table_name='bookings')
    op.drop_table('bookings')
    op.drop_index(op.f('ix_media_uploads_talent_id'), table_name='media_uploads')
    op.drop_index(op.f('ix_media_uploads_user_id'), table_name='media_uploads')
    op.drop_table('media_uploads')
    op.drop_index('uq_talent_applications_active_owner', table_name='talent_applications')
    op.drop_index(op.f('ix_talent_applications_status'), table_name='talent_applications')
    op.drop_index(op.f('ix_talent_applications_user_id'), table_name='talent_applications')
    op.drop_table('talent_applications')
    op.drop_index(op.f('ix_users_reset_token'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    # Drop the enum types (PostgreSQL)
    for name in ('bookingstatus', 'applicationstatus', 'userrole'):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
