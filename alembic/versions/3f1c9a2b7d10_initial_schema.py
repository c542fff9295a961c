"""initial_schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _contact():
    return [
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=255), nullable=True),
    ]


def upgrade() -> None:
    """Create the back-office tables."""
    op.create_table(
        'company',
        *_contact(),
        sa.Column('website', sa.String(length=255), nullable=True),
        sa.Column('industry', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'driver',
        *_contact(),
        sa.Column('hourly_rate', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_table(
        'dispatcher',
        *_contact(),
        sa.Column('commission_percent', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_table(
        'unit',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('plate_number', sa.String(length=50), nullable=True),
        sa.Column('vin', sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('login_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        'job_type',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('start_location', sa.String(length=255), nullable=True),
        sa.Column('end_location', sa.String(length=255), nullable=True),
        sa.Column('dispatch_type', sa.String(length=50), nullable=True),
        sa.Column('rate_of_job', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_table(
        'driver_rate',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('driver_id', sa.Integer(), sa.ForeignKey('driver.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_type_id', sa.Integer(), sa.ForeignKey('job_type.id', ondelete='CASCADE'), nullable=False),
        sa.Column('hourly_rate', sa.Float(), nullable=True),
        sa.Column('percentage_rate', sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'invoice',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('invoice_number', sa.String(length=255), nullable=False),
        sa.Column('invoice_date', sa.Date(), nullable=False),
        sa.Column('dispatcher_id', sa.Integer(), sa.ForeignKey('dispatcher.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('sub_total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('dispatch_percent', sa.Float(), nullable=False, server_default='0'),
        sa.Column('commission', sa.Float(), nullable=False, server_default='0'),
        sa.Column('hst', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('billed_to', sa.String(length=255), nullable=True),
        sa.Column('billed_email', sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'job',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_date', sa.Date(), nullable=False),
        sa.Column('job_type_id', sa.Integer(), sa.ForeignKey('job_type.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('driver_id', sa.Integer(), sa.ForeignKey('driver.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('unit_id', sa.Integer(), sa.ForeignKey('unit.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('dispatcher_id', sa.Integer(), sa.ForeignKey('dispatcher.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('invoice_id', sa.Integer(), sa.ForeignKey('invoice.id', ondelete='SET NULL'), nullable=True),
        sa.Column('invoice_status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('start_time', sa.String(length=10), nullable=True),
        sa.Column('end_time', sa.String(length=10), nullable=True),
        sa.Column('hours_of_job', sa.Float(), nullable=True),
        sa.Column('weight', sa.JSON(), nullable=True),
        sa.Column('loads', sa.Integer(), nullable=True),
        sa.Column('ticket_ids', sa.JSON(), nullable=True),
        sa.Column('job_gross_amount', sa.Float(), nullable=True),
        sa.Column('payment_received', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('driver_paid', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_table(
        'invoice_line',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('invoice_id', sa.Integer(), sa.ForeignKey('invoice.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('job.id', ondelete='SET NULL'), nullable=True),
        sa.Column('line_amount', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
    )

    # Lookup indexes used by list endpoints and invoice attachment
    op.create_index('ix_company_name', 'company', ['name'])
    op.create_index('ix_driver_name', 'driver', ['name'])
    op.create_index('ix_dispatcher_name', 'dispatcher', ['name'])
    op.create_index('ix_unit_name', 'unit', ['name'])
    op.create_index('ix_user_login_id', 'user', ['login_id'], unique=True)
    op.create_index('ix_user_email', 'user', ['email'], unique=True)
    op.create_index('ix_job_type_company_id', 'job_type', ['company_id'])
    op.create_index('ix_job_type_title', 'job_type', ['title'])
    op.create_index('ix_driver_rate_driver_id', 'driver_rate', ['driver_id'])
    op.create_index('ix_driver_rate_job_type_id', 'driver_rate', ['job_type_id'])
    op.create_index('ix_invoice_invoice_number', 'invoice', ['invoice_number'], unique=True)
    op.create_index('ix_invoice_dispatcher_id', 'invoice', ['dispatcher_id'])
    op.create_index('ix_job_job_date', 'job', ['job_date'])
    op.create_index('ix_job_job_type_id', 'job', ['job_type_id'])
    op.create_index('ix_job_driver_id', 'job', ['driver_id'])
    op.create_index('ix_job_unit_id', 'job', ['unit_id'])
    op.create_index('ix_job_dispatcher_id', 'job', ['dispatcher_id'])
    op.create_index('ix_job_invoice_id', 'job', ['invoice_id'])
    op.create_index('ix_invoice_line_invoice_id', 'invoice_line', ['invoice_id'])
    op.create_index('ix_invoice_line_job_id', 'invoice_line', ['job_id'])


def downgrade() -> None:
    """Drop the back-office tables."""
    for table in (
        'invoice_line', 'job', 'invoice', 'driver_rate', 'job_type',
        'user', 'unit', 'dispatcher', 'driver', 'company',
    ):
        op.drop_table(table)
