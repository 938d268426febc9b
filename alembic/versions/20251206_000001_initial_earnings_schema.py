"""Initial earnings schema

Revision ID: 20251206_000001
Revises:
Create Date: 2025-12-06

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20251206_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MONEY = sa.DECIMAL(18, 8)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('sponsor_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'sponsor_id IS NULL OR sponsor_id <> id',
            name=op.f('ck_users_user_not_own_sponsor'),
        ),
        sa.ForeignKeyConstraint(
            ['sponsor_id'], ['users.id'],
            name=op.f('fk_users_sponsor_id_users'), ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users'))
    )
    op.create_index(
        op.f('ix_users_username'), 'users', ['username'], unique=True
    )
    op.create_index(
        op.f('ix_users_sponsor_id'), 'users', ['sponsor_id'], unique=False
    )

    op.create_table(
        'vip_packages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('investment_bs', MONEY, nullable=False),
        sa.Column('daily_profit_bs', MONEY, nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False),
        sa.CheckConstraint(
            'level >= 1', name=op.f('ck_vip_packages_vip_level_positive')
        ),
        sa.CheckConstraint(
            'investment_bs > 0',
            name=op.f('ck_vip_packages_vip_investment_positive'),
        ),
        sa.CheckConstraint(
            'daily_profit_bs >= 0',
            name=op.f('ck_vip_packages_vip_daily_profit_non_negative'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_vip_packages'))
    )
    op.create_index(
        op.f('ix_vip_packages_level'), 'vip_packages', ['level'], unique=True
    )

    op.create_table(
        'referral_bonus_rules',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('percentage', sa.DECIMAL(5, 2), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'level >= 1',
            name=op.f('ck_referral_bonus_rules_bonus_rule_level_positive'),
        ),
        sa.CheckConstraint(
            'percentage >= 0 AND percentage <= 100',
            name=op.f('ck_referral_bonus_rules_bonus_rule_percentage_range'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_referral_bonus_rules'))
    )
    op.create_index(
        op.f('ix_referral_bonus_rules_level'), 'referral_bonus_rules',
        ['level'], unique=True
    )

    op.create_table(
        'purchases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('vip_package_id', sa.Integer(), nullable=False),
        sa.Column('investment_bs', MONEY, nullable=False),
        sa.Column('daily_profit_bs', MONEY, nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('receipt_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('activated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_profit_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            'investment_bs > 0',
            name=op.f('ck_purchases_purchase_investment_positive'),
        ),
        sa.CheckConstraint(
            'daily_profit_bs >= 0',
            name=op.f('ck_purchases_purchase_daily_profit_non_negative'),
        ),
        sa.CheckConstraint(
            "(status = 'ACTIVE') = (activated_at IS NOT NULL)",
            name=op.f('ck_purchases_purchase_activated_iff_active'),
        ),
        sa.CheckConstraint(
            "last_profit_at IS NULL OR status = 'ACTIVE'",
            name=op.f('ck_purchases_purchase_profit_only_when_active'),
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_purchases_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['vip_package_id'], ['vip_packages.id'],
            name=op.f('fk_purchases_vip_package_id_vip_packages'),
            ondelete='RESTRICT'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_purchases'))
    )
    op.create_index(
        op.f('ix_purchases_user_id'), 'purchases', ['user_id'], unique=False
    )
    op.create_index(
        op.f('ix_purchases_status'), 'purchases', ['status'], unique=False
    )
    op.create_index(
        'idx_purchases_user_status', 'purchases',
        ['user_id', 'status'], unique=False
    )

    op.create_table(
        'withdrawal_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount_bs', MONEY, nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payout_details', sa.Text(), nullable=False),
        sa.Column('admin_note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            'amount_bs > 0',
            name=op.f('ck_withdrawal_requests_withdrawal_amount_positive'),
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_withdrawal_requests_user_id_users'),
            ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_withdrawal_requests'))
    )
    op.create_index(
        op.f('ix_withdrawal_requests_user_id'), 'withdrawal_requests',
        ['user_id'], unique=False
    )
    op.create_index(
        op.f('ix_withdrawal_requests_status'), 'withdrawal_requests',
        ['status'], unique=False
    )

    op.create_table(
        'wallet_ledger',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('entry_type', sa.String(length=30), nullable=False),
        sa.Column('adjustment_kind', sa.String(length=20), nullable=True),
        sa.Column('amount_bs', MONEY, nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('referral_level', sa.Integer(), nullable=True),
        sa.Column('source_purchase_id', sa.Integer(), nullable=True),
        sa.Column('source_user_id', sa.Integer(), nullable=True),
        sa.Column('withdrawal_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "entry_type IN ('DAILY_PROFIT', 'REFERRAL_BONUS', "
            "'MANUAL_ADJUSTMENT', 'TASK_BONUS', 'WITHDRAWAL')",
            name=op.f('ck_wallet_ledger_ledger_entry_type_valid'),
        ),
        sa.CheckConstraint(
            "(entry_type = 'MANUAL_ADJUSTMENT') = (adjustment_kind IS NOT NULL)",
            name=op.f(
                'ck_wallet_ledger_ledger_adjustment_kind_only_for_adjustments'
            ),
        ),
        sa.CheckConstraint(
            "(entry_type = 'REFERRAL_BONUS') = (referral_level IS NOT NULL)",
            name=op.f('ck_wallet_ledger_ledger_level_only_for_referral_bonus'),
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_wallet_ledger_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['source_purchase_id'], ['purchases.id'],
            name=op.f('fk_wallet_ledger_source_purchase_id_purchases'),
            ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(
            ['source_user_id'], ['users.id'],
            name=op.f('fk_wallet_ledger_source_user_id_users'),
            ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(
            ['withdrawal_id'], ['withdrawal_requests.id'],
            name=op.f('fk_wallet_ledger_withdrawal_id_withdrawal_requests'),
            ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_wallet_ledger'))
    )
    op.create_index(
        op.f('ix_wallet_ledger_user_id'), 'wallet_ledger',
        ['user_id'], unique=False
    )
    op.create_index(
        'idx_wallet_ledger_user_type', 'wallet_ledger',
        ['user_id', 'entry_type'], unique=False
    )
    # One task bonus per user, ever
    op.create_index(
        'uq_wallet_ledger_task_bonus_once', 'wallet_ledger',
        ['user_id'], unique=True,
        postgresql_where=sa.text("entry_type = 'TASK_BONUS'")
    )
    # One referral payout per (ancestor, purchase, level)
    op.create_index(
        'uq_wallet_ledger_referral_payout', 'wallet_ledger',
        ['user_id', 'source_purchase_id', 'referral_level'], unique=True,
        postgresql_where=sa.text("entry_type = 'REFERRAL_BONUS'")
    )

    op.create_table(
        'task_bonus_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('task_type', sa.String(length=20), nullable=False),
        sa.Column('amount_bs', MONEY, nullable=False),
        sa.Column('screenshot_url', sa.String(length=500), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_task_bonus_records_user_id_users'),
            ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_task_bonus_records')),
        sa.UniqueConstraint(
            'user_id', 'task_type', name='uq_task_bonus_user_task'
        )
    )
    op.create_index(
        op.f('ix_task_bonus_records_user_id'), 'task_bonus_records',
        ['user_id'], unique=False
    )


def downgrade() -> None:
    op.drop_table('task_bonus_records')
    op.drop_index(
        'uq_wallet_ledger_referral_payout', table_name='wallet_ledger'
    )
    op.drop_index(
        'uq_wallet_ledger_task_bonus_once', table_name='wallet_ledger'
    )
    op.drop_table('wallet_ledger')
    op.drop_table('withdrawal_requests')
    op.drop_table('purchases')
    op.drop_table('referral_bonus_rules')
    op.drop_table('vip_packages')
    op.drop_table('users')
