"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


account_type_enum = sa.Enum(
    'saving', 'spending', 'wallet', 'investment', 'business',
    name='account_type_enum',
)
billing_cycle_enum = sa.Enum(
    'weekly', 'monthly', 'quarterly', 'yearly',
    name='billing_cycle_enum',
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # 1. accounts
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('account_type', account_type_enum, nullable=False),
        sa.Column('balance', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('opening_balance', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('balance >= 0', name='ck_accounts_non_negative_balance'),
    )
    op.create_index('ix_accounts_owner_id', 'accounts', ['owner_id'])
    op.create_index('ix_accounts_owner_active', 'accounts', ['owner_id', 'is_active'])

    # 2. categories
    op.create_table(
        'income_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('target_amount', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'target_amount IS NULL OR target_amount > 0',
            name='ck_income_types_positive_target',
        ),
        sa.UniqueConstraint('owner_id', 'name', name='uq_income_types_owner_name'),
    )
    op.create_index('ix_income_types_owner_id', 'income_types', ['owner_id'])

    op.create_table(
        'expense_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('budget_amount', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'budget_amount IS NULL OR budget_amount > 0',
            name='ck_expense_types_positive_budget',
        ),
        sa.UniqueConstraint('owner_id', 'name', name='uq_expense_types_owner_name'),
    )
    op.create_index('ix_expense_types_owner_id', 'expense_types', ['owner_id'])

    # 3. journal
    op.create_table(
        'incomes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('income_type_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['income_type_id'], ['income_types.id'], ondelete='RESTRICT'),
        sa.CheckConstraint('amount > 0', name='ck_incomes_positive_amount'),
    )
    op.create_index('ix_incomes_account_id', 'incomes', ['account_id'])
    op.create_index('ix_incomes_income_type_id', 'incomes', ['income_type_id'])
    op.create_index('ix_incomes_owner_date', 'incomes', ['owner_id', 'date'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('expense_type_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['expense_type_id'], ['expense_types.id'], ondelete='RESTRICT'),
        sa.CheckConstraint('amount > 0', name='ck_expenses_positive_amount'),
    )
    op.create_index('ix_expenses_account_id', 'expenses', ['account_id'])
    op.create_index('ix_expenses_expense_type_id', 'expenses', ['expense_type_id'])
    op.create_index('ix_expenses_owner_date', 'expenses', ['owner_id', 'date'])

    op.create_table(
        'transfers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('from_account_id', sa.Integer(), nullable=False),
        sa.Column('to_account_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['from_account_id'], ['accounts.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['to_account_id'], ['accounts.id'], ondelete='RESTRICT'),
        sa.CheckConstraint('amount > 0', name='ck_transfers_positive_amount'),
        sa.CheckConstraint(
            'from_account_id <> to_account_id', name='ck_transfers_different_accounts'
        ),
    )
    op.create_index('ix_transfers_from_account_id', 'transfers', ['from_account_id'])
    op.create_index('ix_transfers_to_account_id', 'transfers', ['to_account_id'])
    op.create_index('ix_transfers_owner_date', 'transfers', ['owner_id', 'date'])

    # 4. subscriptions
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('billing_cycle', billing_cycle_enum, nullable=False),
        sa.Column('next_billing_date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='RESTRICT'),
        sa.CheckConstraint('amount > 0', name='ck_subscriptions_positive_amount'),
    )
    op.create_index('ix_subscriptions_owner_id', 'subscriptions', ['owner_id'])
    op.create_index('ix_subscriptions_account_id', 'subscriptions', ['account_id'])
    op.create_index('ix_subscriptions_next_billing_date', 'subscriptions', ['next_billing_date'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('subscriptions')
    op.drop_table('transfers')
    op.drop_table('expenses')
    op.drop_table('incomes')
    op.drop_table('expense_types')
    op.drop_table('income_types')
    op.drop_table('accounts')
    billing_cycle_enum.drop(op.get_bind(), checkfirst=True)
    account_type_enum.drop(op.get_bind(), checkfirst=True)
