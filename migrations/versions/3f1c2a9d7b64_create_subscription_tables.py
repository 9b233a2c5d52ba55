"""Create subscribers, newspapers and subscriptions tables

Revision ID: 3f1c2a9d7b64
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9d7b64'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'subscribers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('subscribers', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_subscribers_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_subscribers_email'), ['email'], unique=True)

    op.create_table(
        'newspapers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('publisher', sa.String(length=100), nullable=False),
        sa.Column('frequency', sa.String(length=20), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('newspapers', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_newspapers_name'), ['name'], unique=True)
        batch_op.create_index(batch_op.f('ix_newspapers_publisher'), ['publisher'], unique=False)
        batch_op.create_index(batch_op.f('ix_newspapers_price'), ['price'], unique=False)

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('subscriber_id', sa.Integer(), nullable=False),
        sa.Column('newspaper_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['subscriber_id'], ['subscribers.id']),
        sa.ForeignKeyConstraint(['newspaper_id'], ['newspapers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('subscriptions', schema=None) as batch_op:
        batch_op.create_index('idx_subscription_subscriber_id', ['subscriber_id'], unique=False)
        batch_op.create_index('idx_subscription_newspaper_id', ['newspaper_id'], unique=False)
        batch_op.create_index('idx_subscription_status', ['status'], unique=False)
        # Expiry sweep and expiring-soon queries filter on both columns
        batch_op.create_index('idx_subscription_status_end_date', ['status', 'end_date'], unique=False)
        batch_op.create_index('idx_subscription_pair_status',
                              ['subscriber_id', 'newspaper_id', 'status'], unique=False)

    # MySQL has no partial indexes
    dialect = op.get_bind().dialect.name
    if dialect in ('sqlite', 'postgresql'):
        op.create_index(
            'uq_subscription_active_pair',
            'subscriptions',
            ['subscriber_id', 'newspaper_id'],
            unique=True,
            sqlite_where=sa.text("status = 'active'"),
            postgresql_where=sa.text("status = 'active'"),
        )


def downgrade():
    dialect = op.get_bind().dialect.name
    if dialect in ('sqlite', 'postgresql'):
        op.drop_index('uq_subscription_active_pair', table_name='subscriptions')

    with op.batch_alter_table('subscriptions', schema=None) as batch_op:
        batch_op.drop_index('idx_subscription_pair_status')
        batch_op.drop_index('idx_subscription_status_end_date')
        batch_op.drop_index('idx_subscription_status')
        batch_op.drop_index('idx_subscription_newspaper_id')
        batch_op.drop_index('idx_subscription_subscriber_id')
    op.drop_table('subscriptions')

    with op.batch_alter_table('newspapers', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_newspapers_price'))
        batch_op.drop_index(batch_op.f('ix_newspapers_publisher'))
        batch_op.drop_index(batch_op.f('ix_newspapers_name'))
    op.drop_table('newspapers')

    with op.batch_alter_table('subscribers', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_subscribers_email'))
        batch_op.drop_index(batch_op.f('ix_subscribers_name'))
    op.drop_table('subscribers')
