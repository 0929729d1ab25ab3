"""create_closet_tables

Revision ID: 3f9c2a1d7b40
Revises:
Create Date: 2025-11-24 10:02:17.418305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create reference tables and closet_items."""
    op.create_table(
        'brands',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('body_area', sa.String(length=20), nullable=True, comment='Body area (Top, Bottom, Footwear, Accessory)'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'subcategories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_subcategories_category_id', 'subcategories', ['category_id'])

    op.create_table(
        'conditions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('label', sa.String(length=50), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('label'),
    )

    op.create_table(
        'closet_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_name', sa.String(length=200), nullable=False),
        sa.Column('brand_id', sa.Integer(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('subcategory_id', sa.Integer(), nullable=True),
        sa.Column('condition_id', sa.Integer(), nullable=True),
        sa.Column('size', sa.String(length=50), nullable=True),
        sa.Column('colour', sa.String(length=100), nullable=True),
        sa.Column('purchase_price_cad', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('currency', sa.String(length=3), server_default='CAD', nullable=False),
        sa.Column('brand_override_text', sa.String(length=200), nullable=True),
        sa.Column('model_style_text', sa.String(length=200), nullable=True),
        sa.Column('ai_item_recognition', sa.Text(), nullable=True),
        sa.Column('ai_retail_price_raw', sa.String(length=50), nullable=True),
        sa.Column('ai_resale_price_raw', sa.String(length=50), nullable=True),
        sa.Column('retail_price_cad', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('resale_price_cad', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('estimated_resale_value_cad', sa.Numeric(precision=10, scale=2), nullable=True,
                  comment='resale_price_cad * RESALE_VALUE_RATIO, written by the service layer'),
        sa.Column('ai_listing_title', sa.String(length=300), nullable=True),
        sa.Column('ai_listing_description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=10), server_default='Keep', nullable=False, comment='Keep, Sell or Donate'),
        sa.Column('for_sale', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('sell_platforms', sa.JSON(), nullable=False),
        sa.Column('photo_urls', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['brand_id'], ['brands.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['subcategory_id'], ['subcategories.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['condition_id'], ['conditions.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_closet_items_status', 'closet_items', ['status'])
    op.create_index('ix_closet_items_created_at', 'closet_items', ['created_at'])


def downgrade() -> None:
    """Drop all closet tables."""
    op.drop_index('ix_closet_items_created_at', table_name='closet_items')
    op.drop_index('ix_closet_items_status', table_name='closet_items')
    op.drop_table('closet_items')
    op.drop_table('conditions')
    op.drop_index('ix_subcategories_category_id', table_name='subcategories')
    op.drop_table('subcategories')
    op.drop_table('categories')
    op.drop_table('brands')
