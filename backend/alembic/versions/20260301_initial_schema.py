"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-03-01

Creates users, listings and bids.

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('user_id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_users_status', 'users', ['status'])

    op.create_table(
        'listings',
        sa.Column('listing_id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('landlord_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.user_id'), nullable=False),
        # Set once a tenant is assigned; closes the listing to new bids
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.user_id'), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('rent', sa.Numeric(10, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_listings_landlord', 'listings', ['landlord_id'])
    op.create_index('idx_listings_tenant', 'listings', ['tenant_id'])

    op.create_table(
        'bids',
        sa.Column('bid_id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('listing_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('listings.listing_id'), nullable=False),
        sa.Column('bidder_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.user_id'), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_bids_listing', 'bids', ['listing_id'])
    op.create_index('idx_bids_bidder_created', 'bids', ['bidder_id', 'created_at'])


def downgrade() -> None:
    op.drop_table('bids')
    op.drop_table('listings')
    op.drop_table('users')
