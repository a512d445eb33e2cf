"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # --- Profiles ---
    op.create_table('profiles',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(320), nullable=True),
        sa.Column('username', sa.String(80), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_profiles_email')
    )

    # --- Recipes ---
    op.create_table('recipes',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('author_id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cuisine', sa.String(80), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('prep_time_minutes', sa.Integer(), nullable=True),
        sa.Column('cook_time_minutes', sa.Integer(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=True),
        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('prep_time_minutes IS NULL OR prep_time_minutes >= 0', name='ck_recipes_prep_nonneg'),
        sa.CheckConstraint('cook_time_minutes IS NULL OR cook_time_minutes >= 0', name='ck_recipes_cook_nonneg')
    )
    op.create_index('ix_recipes_author_id', 'recipes', ['author_id'])
    op.create_index('ix_recipes_public_created', 'recipes', ['is_public', 'created_at'])

    op.create_table('recipe_ingredients',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('recipe_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('quantity', sa.Numeric(12, 3), nullable=True),
        sa.Column('unit', sa.String(40), nullable=True),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_recipe_ingredients_recipe_id', 'recipe_ingredients', ['recipe_id'])

    op.create_table('recipe_steps',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('recipe_id', sa.String(36), nullable=False),
        sa.Column('step_number', sa.Integer(), nullable=False),
        sa.Column('instruction', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('recipe_id', 'step_number', name='uq_recipe_steps_number')
    )
    op.create_index('ix_recipe_steps_recipe_id', 'recipe_steps', ['recipe_id'])

    # --- Likes / Saves / Comments ---
    for table in ('recipe_likes', 'recipe_saves'):
        op.create_table(table,
            sa.Column('id', sa.String(36), nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.Column('recipe_id', sa.String(36), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'recipe_id', name=f'uq_{table}_user_recipe')
        )
        op.create_index(f'ix_{table}_recipe_id', table, ['recipe_id'])

    op.create_table('comments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('recipe_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_comments_recipe_created', 'comments', ['recipe_id', 'created_at'])

    # --- Meal Plans ---
    op.create_table('meal_plans',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_date >= start_date', name='ck_meal_plans_date_range')
    )
    op.create_index('ix_meal_plans_user_start', 'meal_plans', ['user_id', 'start_date'])

    op.create_table('meal_plan_items',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('meal_plan_id', sa.String(36), nullable=False),
        sa.Column('recipe_id', sa.String(36), nullable=False),
        sa.Column('scheduled_for', sa.Date(), nullable=False),
        sa.Column('meal', sa.String(20), nullable=False),  # breakfast, lunch, dinner, snack
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plans.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_meal_plan_items_plan_date', 'meal_plan_items', ['meal_plan_id', 'scheduled_for'])

    # --- Shopping Lists ---
    op.create_table('shopping_lists',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('status', sa.String(20), nullable=True),
        sa.Column('generated_from_meal_plan', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['generated_from_meal_plan'], ['meal_plans.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_shopping_lists_user_created', 'shopping_lists', ['user_id', 'created_at'])

    op.create_table('shopping_list_items',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('shopping_list_id', sa.String(36), nullable=False),
        sa.Column('ingredient', sa.String(200), nullable=False),
        sa.Column('quantity', sa.Numeric(12, 2), nullable=True),
        sa.Column('unit', sa.String(40), nullable=True),
        sa.Column('checked', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('position', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['shopping_list_id'], ['shopping_lists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_shopping_list_items_list_id', 'shopping_list_items', ['shopping_list_id'])


def downgrade():
    op.drop_index('ix_shopping_list_items_list_id', table_name='shopping_list_items')
    op.drop_table('shopping_list_items')
    op.drop_index('ix_shopping_lists_user_created', table_name='shopping_lists')
    op.drop_table('shopping_lists')
    op.drop_index('ix_meal_plan_items_plan_date', table_name='meal_plan_items')
    op.drop_table('meal_plan_items')
    op.drop_index('ix_meal_plans_user_start', table_name='meal_plans')
    op.drop_table('meal_plans')
    op.drop_index('ix_comments_recipe_created', table_name='comments')
    op.drop_table('comments')
    for table in ('recipe_saves', 'recipe_likes'):
        op.drop_index(f'ix_{table}_recipe_id', table_name=table)
        op.drop_table(table)
    op.drop_index('ix_recipe_steps_recipe_id', table_name='recipe_steps')
    op.drop_table('recipe_steps')
    op.drop_index('ix_recipe_ingredients_recipe_id', table_name='recipe_ingredients')
    op.drop_table('recipe_ingredients')
    op.drop_index('ix_recipes_public_created', table_name='recipes')
    op.drop_index('ix_recipes_author_id', table_name='recipes')
    op.drop_table('recipes')
    op.drop_table('profiles')
