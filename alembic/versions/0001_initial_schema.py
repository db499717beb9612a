"""Initial schema - users, devices, usage, habits, quotations

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('province', sa.String(50), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('monthly_spend', sa.Numeric(10, 2), server_default='0'),
        sa.Column('monthly_budget', sa.Numeric(10, 2), server_default='0'),
        sa.Column('household_size', sa.String(10), nullable=True),
        sa.Column('property_type', sa.String(20), nullable=True),
        sa.Column('has_pool', sa.Boolean(), server_default='false'),
        sa.Column('cooking_fuel', sa.String(20), nullable=True),
        sa.Column('work_from_home', sa.String(20), nullable=True),
        sa.Column('latitude', sa.Numeric(10, 7), nullable=True),
        sa.Column('longitude', sa.Numeric(10, 7), nullable=True),
        sa.Column('onboarding_completed', sa.Boolean(), server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_table(
        'devices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('watts', sa.Integer(), nullable=False),
        sa.Column('surge_watts', sa.Integer(), server_default='0'),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
    )

    op.create_table(
        'usage_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('device_id', sa.Integer(), sa.ForeignKey('devices.id', ondelete='CASCADE'), nullable=False),
        sa.Column('hours_per_day', sa.Numeric(5, 2), nullable=False),
        sa.Column('days_per_week', sa.Integer(), server_default='7'),
        sa.Column('date', sa.Date(), server_default=sa.text('CURRENT_DATE')),
    )

    op.create_table(
        'habits',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('impact_level', sa.String(10), server_default='MEDIUM'),
    )

    op.create_table(
        'user_habit_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('habit_id', sa.Integer(), sa.ForeignKey('habits.id'), nullable=False),
        sa.Column('date_completed', sa.Date(), server_default=sa.text('CURRENT_DATE')),
    )

    op.create_table(
        'quotations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('user_name', sa.String(100), nullable=True),
        sa.Column('user_email', sa.String(100), nullable=True),
        sa.Column('user_city', sa.String(50), nullable=True),
        sa.Column('user_province', sa.String(50), nullable=True),
        sa.Column('package_tier', sa.String(20), nullable=False),
        sa.Column('package_details', sa.Text(), nullable=True),
        sa.Column('devices_summary', sa.Text(), nullable=True),
        sa.Column('total_cost', sa.String(50), nullable=True),
        sa.Column('status', sa.String(20), server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_index('ix_devices_user_id', 'devices', ['user_id'])
    op.create_index('ix_usage_logs_device_id', 'usage_logs', ['device_id'])
    op.create_index('ix_habits_user_id', 'habits', ['user_id'])
    op.create_index('ix_quotations_user_id', 'quotations', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_quotations_user_id', table_name='quotations')
    op.drop_index('ix_habits_user_id', table_name='habits')
    op.drop_index('ix_usage_logs_device_id', table_name='usage_logs')
    op.drop_index('ix_devices_user_id', table_name='devices')
    op.drop_table('quotations')
    op.drop_table('user_habit_logs')
    op.drop_table('habits')
    op.drop_table('usage_logs')
    op.drop_table('devices')
    op.drop_table('users')
