"""create_invitation_tables

Revision ID: 3f9a1c2d7b10
Revises:
Create Date: 2026-10-17 09:14:02.381245

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9a1c2d7b10'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('super_admin', 'user_mitra', 'user_customer', name='user_role')
user_status = sa.Enum('pending', 'active', 'suspended', 'rejected', name='user_status')
template_category = sa.Enum('romantic', 'contemporary', 'formal', 'traditional', name='template_category')
invitation_status = sa.Enum('draft', 'published', 'unpublished', 'archived', name='invitation_status')
rsvp_status = sa.Enum('attending', 'not_attending', 'maybe', name='rsvp_status')
payment_status = sa.Enum('pending', 'completed', 'failed', 'refunded', name='payment_status')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=512), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=512), nullable=False),
        sa.Column('phone', sa.String(length=512), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('status', user_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_by', sa.Integer(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], name='fk_users_approved_by'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'login_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('login_time', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('ip_address', sa.String(length=512), nullable=False),
        sa.Column('user_agent', sa.String(length=1024), nullable=False),
        sa.Column('success', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_login_logs_id', 'login_logs', ['id'], unique=False)
    op.create_index('ix_login_logs_user_id', 'login_logs', ['user_id'], unique=False)
    op.create_index('ix_login_logs_login_time', 'login_logs', ['login_time'], unique=False)

    op.create_table(
        'templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', template_category, nullable=False),
        sa.Column('thumbnail_url', sa.String(length=1024), nullable=False),
        sa.Column('preview_url', sa.String(length=1024), nullable=False),
        sa.Column('template_data', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_templates_id', 'templates', ['id'], unique=False)
    op.create_index('ix_templates_category', 'templates', ['category'], unique=False)

    op.create_table(
        'invitations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('status', invitation_status, nullable=False),
        sa.Column('wedding_data', sa.Text(), nullable=False),
        sa.Column('custom_css', sa.Text(), nullable=True),
        sa.Column('view_count', sa.Integer(), nullable=False),
        sa.Column('rsvp_count', sa.Integer(), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_invitations_user_id'),
        sa.ForeignKeyConstraint(['template_id'], ['templates.id'], name='fk_invitations_template_id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_invitations_id', 'invitations', ['id'], unique=False)
    op.create_index('ix_invitations_user_id', 'invitations', ['user_id'], unique=False)
    op.create_index('ix_invitations_template_id', 'invitations', ['template_id'], unique=False)
    op.create_index('ix_invitations_slug', 'invitations', ['slug'], unique=True)
    op.create_index('ix_invitations_status', 'invitations', ['status'], unique=False)

    op.create_table(
        'rsvps',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invitation_id', sa.Integer(), nullable=False),
        sa.Column('guest_name', sa.String(length=255), nullable=False),
        sa.Column('guest_email', sa.String(length=255), nullable=True),
        sa.Column('guest_phone', sa.String(length=50), nullable=True),
        sa.Column('status', rsvp_status, nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['invitation_id'], ['invitations.id'], name='fk_rsvps_invitation_id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rsvps_id', 'rsvps', ['id'], unique=False)
    op.create_index('ix_rsvps_invitation_id', 'rsvps', ['invitation_id'], unique=False)

    op.create_table(
        'guestbooks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invitation_id', sa.Integer(), nullable=False),
        sa.Column('guest_name', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_approved', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['invitation_id'], ['invitations.id'], name='fk_guestbooks_invitation_id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_guestbooks_id', 'guestbooks', ['id'], unique=False)
    op.create_index('ix_guestbooks_invitation_id', 'guestbooks', ['invitation_id'], unique=False)

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('invitation_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=10), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('status', payment_status, nullable=False),
        sa.Column('transaction_id', sa.String(length=64), nullable=True),
        sa.Column('payment_data', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_payments_user_id'),
        sa.ForeignKeyConstraint(['invitation_id'], ['invitations.id'], name='fk_payments_invitation_id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payments_id', 'payments', ['id'], unique=False)
    op.create_index('ix_payments_user_id', 'payments', ['user_id'], unique=False)
    op.create_index('ix_payments_invitation_id', 'payments', ['invitation_id'], unique=False)
    op.create_index('ix_payments_transaction_id', 'payments', ['transaction_id'], unique=False)

    op.create_table(
        'visitors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invitation_id', sa.Integer(), nullable=False),
        sa.Column('ip_address', sa.String(length=512), nullable=False),
        sa.Column('user_agent', sa.String(length=1024), nullable=False),
        sa.Column('referrer', sa.String(length=1024), nullable=True),
        sa.Column('visited_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['invitation_id'], ['invitations.id'], name='fk_visitors_invitation_id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_visitors_id', 'visitors', ['id'], unique=False)
    op.create_index('ix_visitors_invitation_id', 'visitors', ['invitation_id'], unique=False)
    op.create_index('ix_visitors_visited_at', 'visitors', ['visited_at'], unique=False)


def downgrade() -> None:
    op.drop_table('visitors')
    op.drop_table('payments')
    op.drop_table('guestbooks')
    op.drop_table('rsvps')
    op.drop_table('invitations')
    op.drop_table('templates')
    op.drop_table('login_logs')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (payment_status, rsvp_status, invitation_status, template_category, user_status, user_role):
        enum_type.drop(bind, checkfirst=True)
