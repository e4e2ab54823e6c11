"""Create billing tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

This migration creates owners, apartments, the owner <-> apartment
association, rooms, bills and bill line items.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create the billing tables."""
    op.create_table(
        'owners',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('tax_id', sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_owners_tax_id', 'owners', ['tax_id'], unique=True)

    op.create_table(
        'apartments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('tax_id', sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'apartment_owners',
        sa.Column('apartment_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('apartment_id', 'owner_id'),
        sa.ForeignKeyConstraint(
            ['apartment_id'],
            ['apartments.id'],
            name='fk_apartment_owners_apartment_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'],
            ['owners.id'],
            name='fk_apartment_owners_owner_id',
            ondelete='CASCADE'
        ),
    )

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('apartment_id', sa.Integer(), nullable=False),
        sa.Column('room_number', sa.String(length=50), nullable=False),
        sa.Column('tenant_name', sa.String(length=255), nullable=True),
        sa.Column('tenant_address', sa.String(length=500), nullable=True),
        sa.Column('tenant_phone', sa.String(length=50), nullable=True),
        sa.Column('tenant_tax_id', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['apartment_id'],
            ['apartments.id'],
            name='fk_rooms_apartment_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_rooms_apartment_id', 'rooms', ['apartment_id'])

    money = sa.Numeric(precision=12, scale=2)
    rate = sa.Numeric(precision=10, scale=4)
    op.create_table(
        'bills',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('apartment_id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('billing_date', sa.DateTime(), nullable=False),
        sa.Column('payment_due_date', sa.Date(), nullable=False),
        sa.Column('rental_from', sa.Date(), nullable=False),
        sa.Column('rental_to', sa.Date(), nullable=False),
        sa.Column('tenant_name', sa.String(length=255), nullable=False),
        sa.Column('tenant_address', sa.String(length=500), nullable=False),
        sa.Column('tenant_phone', sa.String(length=50), nullable=False),
        sa.Column('tenant_tax_id', sa.String(length=50), nullable=False),
        sa.Column('rent', money, nullable=False),
        sa.Column('electricity_start_meter', money, nullable=False),
        sa.Column('electricity_end_meter', money, nullable=False),
        sa.Column('electricity_rate', rate, nullable=False),
        sa.Column('electricity_meter_fee', money, nullable=False),
        sa.Column('water_start_meter', money, nullable=False),
        sa.Column('water_end_meter', money, nullable=False),
        sa.Column('water_rate', rate, nullable=False),
        sa.Column('water_meter_fee', money, nullable=False),
        sa.Column('aircon_fee', money, nullable=False),
        sa.Column('fridge_fee', money, nullable=False),
        sa.Column('net_rent', money, nullable=False),
        sa.Column('electricity_cost', money, nullable=False),
        sa.Column('water_cost', money, nullable=False),
        sa.Column('other_fees_total', money, nullable=False),
        sa.Column('grand_total', money, nullable=False),
        sa.Column('document_number', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['apartment_id'],
            ['apartments.id'],
            name='fk_bills_apartment_id',
            ondelete='NO ACTION'
        ),
        sa.ForeignKeyConstraint(
            ['room_id'],
            ['rooms.id'],
            name='fk_bills_room_id',
            ondelete='NO ACTION'
        ),
    )

    # Create indexes for common queries
    op.create_index('ix_bills_apartment_id', 'bills', ['apartment_id'])
    op.create_index('ix_bills_room_id', 'bills', ['room_id'])
    op.create_index('ix_bills_billing_date', 'bills', ['billing_date'])

    op.create_table(
        'bill_line_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('bill_id', sa.Integer(), nullable=False),
        sa.Column(
            'kind',
            sa.Enum('DISCOUNT', 'OTHER_FEE', name='line_item_kind'),
            nullable=False
        ),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', money, nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['bill_id'],
            ['bills.id'],
            name='fk_bill_line_items_bill_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_bill_line_items_bill_id', 'bill_line_items', ['bill_id'])


def downgrade() -> None:
    """Drop the billing tables."""
    op.drop_index('ix_bill_line_items_bill_id', table_name='bill_line_items')
    op.drop_table('bill_line_items')
    op.drop_index('ix_bills_billing_date', table_name='bills')
    op.drop_index('ix_bills_room_id', table_name='bills')
    op.drop_index('ix_bills_apartment_id', table_name='bills')
    op.drop_table('bills')
    op.drop_index('ix_rooms_apartment_id', table_name='rooms')
    op.drop_table('rooms')
    op.drop_table('apartment_owners')
    op.drop_table('apartments')
    op.drop_index('ix_owners_tax_id', table_name='owners')
    op.drop_table('owners')
