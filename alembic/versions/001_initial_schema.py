"""Initial schema: collections, token classes, mint transactions.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Collections table
    op.create_table(
        'collections',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('collection_name', sa.String(255), nullable=False),
        sa.Column('wallet_address', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('symbol', sa.String(50), nullable=True),
        sa.Column('contract_address', sa.String(255), nullable=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('type', sa.String(100), nullable=True),
        sa.Column('rarity', sa.String(100), nullable=True),
        sa.Column('max_supply', sa.String(50), nullable=True),
        sa.Column('max_capacity', sa.String(50), nullable=True),
        sa.Column('metadata_address', sa.String(255), nullable=True),
        sa.Column('transaction_id', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_collections_collection_name', 'collections', ['collection_name'], unique=True)
    op.create_index('ix_collections_wallet_address', 'collections', ['wallet_address'])

    # Token classes table
    op.create_table(
        'token_classes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('collection', sa.String(255), nullable=False),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('additional_key', sa.String(100), nullable=False),
        sa.Column('wallet_address', sa.String(255), nullable=False),
        sa.Column('transaction_id', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('current_supply', sa.String(100), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_token_classes_collection', 'token_classes', ['collection'])
    op.create_index('ix_token_classes_wallet_address', 'token_classes', ['wallet_address'])
    op.create_index(
        'ix_token_classes_natural_key',
        'token_classes',
        ['collection', 'type', 'category', 'additional_key'],
        unique=True,
    )

    # Mint transactions table
    op.create_table(
        'mint_transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('wallet_address', sa.String(255), nullable=False),
        sa.Column('collection', sa.String(255), nullable=False),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('additional_key', sa.String(100), nullable=True),
        sa.Column('owner', sa.String(255), nullable=False),
        sa.Column('quantity', sa.String(100), nullable=False),
        sa.Column('token_instance', sa.String(100), nullable=False),
        sa.Column('transaction_id', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_mint_transactions_wallet_address', 'mint_transactions', ['wallet_address'])


def downgrade() -> None:
    op.drop_table('mint_transactions')
    op.drop_table('token_classes')
    op.drop_table('collections')
