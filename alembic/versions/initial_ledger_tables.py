"""initial ledger tables

Revision ID: initial_ledger_tables
Revises:
Create Date: 2025-01-06

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_ledger_tables'
down_revision = None
branch_labels = None
depends_on = None

payment_method_type = sa.Enum('card', 'bank', 'cash', 'other', name='payment_method_type')
transaction_type = sa.Enum('income', 'expense', name='transaction_type')

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('is_superuser', sa.Boolean, nullable=False),
        sa.Column('is_verified', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=50), nullable=False),
        sa.Column('color', sa.String(length=20), nullable=False),
        sa.Column('budget_amount', sa.Integer, nullable=False, server_default='0'),
        sa.Column('is_default', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.CheckConstraint('budget_amount >= 0', name='ck_categories_budget_amount_non_negative'),
    )
    op.create_index('ix_categories_user_id', 'categories', ['user_id'])

    op.create_table(
        'payment_methods',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('type', payment_method_type, nullable=False),
        sa.Column('color', sa.String(length=20), nullable=False),
        sa.Column('icon', sa.String(length=50), nullable=False),
        sa.Column('is_default', sa.Boolean, nullable=False),
        sa.Column('billing_day', sa.Integer, nullable=True),
        sa.Column('billing_start_day', sa.Integer, nullable=True),
        sa.Column('billing_end_day', sa.Integer, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_payment_methods_user_id', 'payment_methods', ['user_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', transaction_type, nullable=False),
        sa.Column('amount', sa.Integer, nullable=False),
        sa.Column('category_id', sa.Uuid(as_uuid=True), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('payment_method_id', sa.Uuid(as_uuid=True), sa.ForeignKey('payment_methods.id', ondelete='SET NULL'), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('memo', sa.String(length=255), nullable=True),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('is_fixed', sa.Boolean, nullable=False),
        sa.Column('installment_months', sa.Integer, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
        sa.CheckConstraint('amount > 0', name='ck_transactions_amount_positive'),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_date', 'transactions', ['date'])

    op.create_table(
        'fixed_expenses',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.Uuid(as_uuid=True), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('payment_method_id', sa.Uuid(as_uuid=True), sa.ForeignKey('payment_methods.id', ondelete='SET NULL'), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Integer, nullable=False),
        sa.Column('due_day', sa.Integer, nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_fixed_expenses_user_id', 'fixed_expenses', ['user_id'])

def downgrade():
    op.drop_table('fixed_expenses')
    op.drop_table('transactions')
    op.drop_table('payment_methods')
    op.drop_table('categories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    transaction_type.drop(op.get_bind(), checkfirst=True)
    payment_method_type.drop(op.get_bind(), checkfirst=True)
