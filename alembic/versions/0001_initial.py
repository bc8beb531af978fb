"""initial booking schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 12:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'tenants',
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False, server_default=sa.text("'active'")),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('opening_time', sa.Text()),
        sa.Column('closing_time', sa.Text()),
        sa.Column('created_at', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_table(
        'tenant_api_keys',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('api_key', sa.Text(), nullable=False, unique=True),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_table(
        'closed_days',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weekday', sa.Integer(), nullable=False),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.UniqueConstraint('tenant_id', 'weekday'),
    )
    op.create_table(
        'staff_members',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.Column('color', sa.Text(), nullable=False, server_default=sa.text("'#3b82f6'")),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_table(
        'staff_shifts',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('staff_member_id', sa.Integer(), sa.ForeignKey('staff_members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Text(), nullable=False),
        sa.Column('end_time', sa.Text(), nullable=False),
        sa.Column('is_working', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.UniqueConstraint('staff_member_id', 'day_of_week'),
    )
    op.create_table(
        'shift_exceptions',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('staff_member_id', sa.Integer(), sa.ForeignKey('staff_members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exception_date', sa.Text(), nullable=False),
        sa.Column('start_time', sa.Text(), nullable=False),
        sa.Column('end_time', sa.Text(), nullable=False),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('reason', sa.Text()),
    )
    op.create_table(
        'products',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default=sa.text('60')),
        sa.Column('is_active', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('category', sa.Text()),
    )
    op.create_table(
        'reservations',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('customer_name', sa.Text(), nullable=False),
        sa.Column('reservation_date', sa.Text(), nullable=False),
        sa.Column('reservation_time', sa.Text(), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False, server_default=sa.text('2')),
        sa.Column('status', sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column('source', sa.Text(), nullable=False, server_default=sa.text("'api'")),
        sa.Column('created_at', sa.Text(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.Text(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('end_time', sa.Text()),
        sa.Column('customer_phone', sa.Text()),
        sa.Column('customer_email', sa.Text()),
        sa.Column('staff_member_id', sa.Integer(), sa.ForeignKey('staff_members.id', ondelete='SET NULL')),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='SET NULL')),
        sa.Column('price_paid', sa.Float()),
        sa.Column('notes', sa.Text()),
    )
    op.create_index('ix_reservations_tenant_date', 'reservations', ['tenant_id', 'reservation_date'])
    op.create_table(
        'notifications',
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.Text(), nullable=False, server_default=sa.text("'info'")),
        sa.Column('read', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('link', sa.Text()),
        sa.Column('created_at', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )


def downgrade():
    op.drop_table('notifications')
    op.drop_index('ix_reservations_tenant_date', table_name='reservations')
    op.drop_table('reservations')
    op.drop_table('products')
    op.drop_table('shift_exceptions')
    op.drop_table('staff_shifts')
    op.drop_table('staff_members')
    op.drop_table('closed_days')
    op.drop_table('tenant_api_keys')
    op.drop_table('tenants')
