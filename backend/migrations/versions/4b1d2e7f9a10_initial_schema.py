"""initial schema: users, restaurants, reviews

Revision ID: 4b1d2e7f9a10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1d2e7f9a10'
down_revision = None
branch_labels = None
depends_on = None

role_enum = sa.Enum('user', 'admin', name='enum_role')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', role_enum, server_default='user', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'restaurants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column('average_rating', sa.Float(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_restaurants'),
    )
    op.create_index('ix_restaurants_name', 'restaurants', ['name'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('rating >= 1.0 AND rating <= 5.0', name='ck_reviews_rating_range'),
        sa.ForeignKeyConstraint(
            ['restaurant_id'], ['restaurants.id'],
            name='fk_reviews_restaurant_id_restaurants', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_reviews_user_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_reviews'),
    )
    op.create_index('ix_reviews_restaurant_id', 'reviews', ['restaurant_id'])
    op.create_index('ix_reviews_user_id', 'reviews', ['user_id'])


def downgrade():
    op.drop_index('ix_reviews_user_id', table_name='reviews')
    op.drop_index('ix_reviews_restaurant_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_restaurants_name', table_name='restaurants')
    op.drop_table('restaurants')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_table('users')
    role_enum.drop(op.get_bind(), checkfirst=True)
