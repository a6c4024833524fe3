"""create_canteen_tables

Admin users, versioned menu items and per-unit coupons.

Revision ID: 20261019_canteen
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from fastapi_users_db_sqlalchemy.generics import GUID


# revision identifiers, used by Alembic.
revision: str = '20261019_canteen'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
MEALS = ('Breakfast', 'Lunch', 'Dinner')
ORDER_TYPES = ('Dine-In', 'Takeaway')
STATUSES = ('Pending', 'Active', 'Used', 'Expired')


def _enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, length=16)


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_superuser', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'menu_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('day_of_week', _enum(DAYS, 'dayofweek'), nullable=False),
        sa.Column('meal_type', _enum(MEALS, 'mealtype'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(
        'uq_menu_items_active_slot',
        'menu_items',
        ['day_of_week', 'meal_type'],
        unique=True,
        sqlite_where=sa.text('is_active = 1'),
        postgresql_where=sa.text('is_active'),
    )
    op.create_index('idx_menu_items_slot_version', 'menu_items', ['day_of_week', 'meal_type', 'version'])

    op.create_table(
        'coupons',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('order_id', sa.String(length=36), nullable=False),
        sa.Column('meal_date', sa.Date(), nullable=False),
        sa.Column('meal_type', _enum(MEALS, 'mealtype'), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('customer_email', sa.String(), nullable=False),
        sa.Column('customer_phone', sa.String(length=10), nullable=False),
        sa.Column('order_type', _enum(ORDER_TYPES, 'ordertype'), nullable=False),
        sa.Column('status', _enum(STATUSES, 'couponstatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('activated_at', sa.DateTime(), nullable=True),
        sa.Column('redeemed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_coupons_order', 'coupons', ['order_id'])
    op.create_index('idx_coupons_meal_date_status', 'coupons', ['meal_date', 'status'])
    op.create_index('idx_coupons_created', 'coupons', ['created_at'])


def downgrade():
    op.drop_index('idx_coupons_created', table_name='coupons')
    op.drop_index('idx_coupons_meal_date_status', table_name='coupons')
    op.drop_index('idx_coupons_order', table_name='coupons')
    op.drop_table('coupons')

    op.drop_index('idx_menu_items_slot_version', table_name='menu_items')
    op.drop_index('uq_menu_items_active_slot', table_name='menu_items')
    op.drop_table('menu_items')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
