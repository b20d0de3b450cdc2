"""Create booking, availability and floor plan tables

Revision ID: 0001_create_booking_tables
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_booking_tables'
down_revision = None
branch_labels = None
depends_on = None

management_mode = sa.Enum('guest-count', 'table-based', name='management_mode')
booking_status = sa.Enum(
    'pending', 'confirmed', 'seated', 'completed', 'cancelled', 'no-show',
    name='booking_status'
)


def upgrade():
    op.create_table('restaurant_availability',
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('management_mode', management_mode, nullable=False),
        sa.Column('schedule', sa.JSON(), nullable=False),
        sa.Column('special_dates', sa.JSON(), nullable=False),
        sa.Column('default_capacity_per_slot', sa.Integer(), nullable=False),
        sa.Column('advance_booking_days', sa.Integer(), nullable=False),
        sa.Column('table_turning_time', sa.Integer(), nullable=False),
        sa.Column('tables', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('restaurant_id')
    )

    op.create_table('bookings',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('restaurant_name', sa.String(length=200), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('user_name', sa.String(length=200), nullable=False),
        sa.Column('user_email', sa.String(length=200), nullable=False),
        sa.Column('user_phone', sa.String(length=50), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('booking_time', sa.String(length=5), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('status', booking_status, nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('confirmation_code', sa.String(length=16), nullable=True),
        sa.Column('table_id', sa.String(length=64), nullable=True),
        sa.Column('table_number', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bookings_restaurant_id'), 'bookings', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)
    op.create_index(op.f('ix_bookings_confirmation_code'), 'bookings', ['confirmation_code'], unique=True)
    op.create_index('idx_booking_restaurant_date_time', 'bookings',
                    ['restaurant_id', 'booking_date', 'booking_time'], unique=False)
    op.create_index('idx_booking_restaurant_status', 'bookings',
                    ['restaurant_id', 'status'], unique=False)

    op.create_table('booking_revisions',
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('restaurant_id', 'booking_date')
    )

    op.create_table('floor_plans',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('restaurant_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('width', sa.Integer(), nullable=False),
        sa.Column('height', sa.Integer(), nullable=False),
        sa.Column('tables', sa.JSON(), nullable=False),
        sa.Column('elements', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_floor_plans_restaurant_id'), 'floor_plans', ['restaurant_id'], unique=False)
    op.create_index('idx_floor_plan_restaurant_updated', 'floor_plans',
                    ['restaurant_id', 'updated_at'], unique=False)


def downgrade():
    op.drop_index('idx_floor_plan_restaurant_updated', table_name='floor_plans')
    op.drop_index(op.f('ix_floor_plans_restaurant_id'), table_name='floor_plans')
    op.drop_table('floor_plans')

    op.drop_table('booking_revisions')

    op.drop_index('idx_booking_restaurant_status', table_name='bookings')
    op.drop_index('idx_booking_restaurant_date_time', table_name='bookings')
    op.drop_index(op.f('ix_bookings_confirmation_code'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_status'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_user_id'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_restaurant_id'), table_name='bookings')
    op.drop_table('bookings')

    op.drop_table('restaurant_availability')

    booking_status.drop(op.get_bind(), checkfirst=True)
    management_mode.drop(op.get_bind(), checkfirst=True)
