from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('institution', sa.String(length=255), nullable=True),
        sa.Column('avatar', sa.String(length=512), nullable=True),
        sa.Column('xp', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_active_date', sa.Date(), nullable=True),
        sa.Column('auth_provider', sa.String(length=20), nullable=False, server_default='email'),
        sa.Column('github_id', sa.String(length=50), nullable=True, unique=True),
        sa.Column('github_username', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    op.create_table(
        'user_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, unique=True),
        sa.Column('completed_lessons', sa.JSON(), nullable=False),
        sa.Column('completed_modules', sa.JSON(), nullable=False),
        sa.Column('current_path', sa.String(length=255), nullable=True),
        sa.Column('current_module', sa.String(length=255), nullable=True),
        sa.Column('current_lesson', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    op.create_table(
        'user_badges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('badge_id', sa.String(length=50), nullable=False),
        sa.Column('badge_name', sa.String(length=100), nullable=False),
        sa.Column('earned_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'badge_id', name='unique_user_badge')
    )

    op.create_table(
        'module_discussions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('module_id', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False)
    )
    op.create_index('ix_module_discussions_module_id', 'module_discussions', ['module_id'])


def downgrade():
    op.drop_index('ix_module_discussions_module_id', table_name='module_discussions')
    op.drop_table('module_discussions')
    op.drop_table('user_badges')
    op.drop_table('user_progress')
    op.drop_table('users')
