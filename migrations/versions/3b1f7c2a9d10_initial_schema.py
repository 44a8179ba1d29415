"""Initial schema: accounts, profiles, meal plans, shopping lists and logs

Revision ID: 3b1f7c2a9d10
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b1f7c2a9d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'profile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=200), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('height_cm', sa.Float(), nullable=True),
        sa.Column('current_weight_kg', sa.Float(), nullable=True),
        sa.Column('target_weight_kg', sa.Float(), nullable=True),
        sa.Column('activity_level', sa.String(length=30), nullable=True),
        sa.Column('primary_goal', sa.String(length=30), nullable=True),
        sa.Column('weekly_goal_kg', sa.Float(), nullable=True),
        sa.Column('target_date', sa.Date(), nullable=True),
        sa.Column('diet_type', sa.String(length=30), nullable=True),
        sa.Column('allergies', sa.JSON(), nullable=True),
        sa.Column('disliked_foods', sa.JSON(), nullable=True),
        sa.Column('favorite_cuisines', sa.JSON(), nullable=True),
        sa.Column('budget_level', sa.String(length=20), nullable=True),
        sa.Column('cooking_skill', sa.String(length=20), nullable=True),
        sa.Column('meal_prep_time_minutes', sa.Integer(), nullable=True),
        sa.Column('servings_per_meal', sa.Integer(), nullable=True),
        sa.Column('daily_calories_target', sa.Integer(), nullable=True),
        sa.Column('daily_protein_g', sa.Integer(), nullable=True),
        sa.Column('daily_carbs_g', sa.Integer(), nullable=True),
        sa.Column('daily_fat_g', sa.Integer(), nullable=True),
        sa.Column('targets_need_review', sa.Boolean(), nullable=True),
        sa.Column('onboarding_completed', sa.Boolean(), nullable=True),
        sa.Column('onboarding_step', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'onboarding_draft',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('last_step', sa.Integer(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'recipe',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('prep_time_minutes', sa.Integer(), nullable=True),
        sa.Column('cook_time_minutes', sa.Integer(), nullable=True),
        sa.Column('total_time_minutes', sa.Integer(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=20), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein_g', sa.Float(), nullable=True),
        sa.Column('carbs_g', sa.Float(), nullable=True),
        sa.Column('fat_g', sa.Float(), nullable=True),
        sa.Column('fiber_g', sa.Float(), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=False),
        sa.Column('instructions', sa.JSON(), nullable=False),
        sa.Column('cuisine', sa.String(length=50), nullable=True),
        sa.Column('meal_type', sa.String(length=20), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('estimated_cost', sa.Float(), nullable=True),
        sa.Column('cost_per_serving', sa.Float(), nullable=True),
        sa.Column('is_ai_generated', sa.Boolean(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_recipe_name', 'recipe', ['name'])
    op.create_index('ix_recipe_meal_type', 'recipe', ['meal_type'])
    op.create_index('ix_recipe_created_by', 'recipe', ['created_by'])

    op.create_table(
        'meal_plan',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('total_days', sa.Integer(), nullable=False),
        sa.Column('avg_daily_calories', sa.Integer(), nullable=True),
        sa.Column('avg_daily_protein_g', sa.Integer(), nullable=True),
        sa.Column('avg_daily_carbs_g', sa.Integer(), nullable=True),
        sa.Column('avg_daily_fat_g', sa.Integer(), nullable=True),
        sa.Column('estimated_total_cost', sa.Float(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('generation_prompt', sa.Text(), nullable=True),
        sa.Column('meals_requested', sa.Integer(), nullable=True),
        sa.Column('meals_saved', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_meal_plan_user_id', 'meal_plan', ['user_id'])
    op.create_index('ix_meal_plan_is_active', 'meal_plan', ['is_active'])

    op.create_table(
        'meal_plan_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('meal_plan_id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=True),
        sa.Column('plan_date', sa.Date(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('meal_order', sa.Integer(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=True),
        sa.Column('recipe_name', sa.String(length=200), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plan.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_meal_plan_item_meal_plan_id', 'meal_plan_item', ['meal_plan_id'])
    op.create_index('ix_meal_plan_item_recipe_id', 'meal_plan_item', ['recipe_id'])
    op.create_index('ix_meal_plan_item_plan_date', 'meal_plan_item', ['plan_date'])

    op.create_table(
        'shopping_list',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('meal_plan_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=250), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('estimated_total_cost', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plan.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shopping_list_user_id', 'shopping_list', ['user_id'])
    op.create_index('ix_shopping_list_meal_plan_id', 'shopping_list', ['meal_plan_id'])

    op.create_table(
        'shopping_list_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('shopping_list_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_name', sa.String(length=200), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('unit', sa.String(length=30), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('estimated_cost', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_purchased', sa.Boolean(), nullable=True),
        sa.Column('purchased_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['shopping_list_id'], ['shopping_list.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shopping_list_item_shopping_list_id', 'shopping_list_item', ['shopping_list_id'])
    op.create_index('ix_shopping_list_item_category', 'shopping_list_item', ['category'])

    op.create_table(
        'weight_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('weight_kg', sa.Float(), nullable=False),
        sa.Column('logged_at', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'logged_at', name='uq_weight_log_user_date'),
    )
    op.create_index('ix_weight_log_user_id', 'weight_log', ['user_id'])

    op.create_table(
        'food_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=True),
        sa.Column('food_name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('servings', sa.Float(), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein_g', sa.Float(), nullable=True),
        sa.Column('carbs_g', sa.Float(), nullable=True),
        sa.Column('fat_g', sa.Float(), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('photo_analysis', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('mood', sa.String(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_food_log_user_id', 'food_log', ['user_id'])
    op.create_index('ix_food_log_logged_at', 'food_log', ['logged_at'])


def downgrade():
    op.drop_table('food_log')
    op.drop_table('weight_log')
    op.drop_table('shopping_list_item')
    op.drop_table('shopping_list')
    op.drop_table('meal_plan_item')
    op.drop_table('meal_plan')
    op.drop_table('recipe')
    op.drop_table('onboarding_draft')
    op.drop_table('profile')
    op.drop_table('user')
