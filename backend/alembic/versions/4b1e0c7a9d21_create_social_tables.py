"""create users, posts, likes, comments, follows, custom exercises, notifications, days goals

Revision ID: 4b1e0c7a9d21
Revises:
Create Date: 2026-10-19 10:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

notification_type = sa.Enum('like', 'follow', 'comment', name='notification_type')


# revision identifiers, used by Alembic.
revision: str = '4b1e0c7a9d21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False))
    return cols


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=128), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True, index=True),
        sa.Column('display_name', sa.String(length=120), nullable=False),
        sa.Column('username', sa.String(length=60), nullable=False, index=True),
        sa.Column('bio', sa.Text(), nullable=False, server_default=''),
        sa.Column('avatar', sa.Text(), nullable=False, server_default=''),
        *_timestamps(),
    )

    # no foreign keys below: posts, likes and comments are loosely linked by id
    op.create_table(
        'posts',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('user_id', sa.String(length=128), nullable=False, index=True),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('exercise', sa.JSON(), nullable=False),
        sa.Column('timestamp', sa.String(length=64), nullable=False, server_default=''),
        *_timestamps(),
    )
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    op.create_table(
        'likes',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('post_id', sa.String(length=32), nullable=False, index=True),
        sa.Column('user_id', sa.String(length=128), nullable=False, index=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        'comments',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('post_id', sa.String(length=32), nullable=False, index=True),
        sa.Column('user_id', sa.String(length=128), nullable=False, index=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('parent_id', sa.String(length=32), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'follows',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('follower_id', sa.String(length=128), nullable=False, index=True),
        sa.Column('following_id', sa.String(length=128), nullable=False, index=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        'custom_exercises',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('user_id', sa.String(length=128), nullable=False, index=True),
        sa.Column('body_part', sa.String(length=40), nullable=False),
        sa.Column('exercise_name', sa.String(length=120), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('user_id', sa.String(length=128), nullable=False, index=True),
        sa.Column('from_user_id', sa.String(length=128), nullable=False),
        sa.Column('from_user_name', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('from_user_avatar', sa.Text(), nullable=False, server_default=''),
        sa.Column('type', notification_type, nullable=False),
        sa.Column('post_id', sa.String(length=32), nullable=True),
        sa.Column('message', sa.String(length=255), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(updated=False),
    )

    op.create_table(
        'days_goals',
        sa.Column('id', sa.String(length=128), primary_key=True),
        sa.Column('user_id', sa.String(length=128), nullable=False, unique=True),
        sa.Column('monthly_target', sa.Integer(), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('days_goals')
    op.drop_table('notifications')
    op.drop_table('custom_exercises')
    op.drop_table('follows')
    op.drop_table('comments')
    op.drop_table('likes')
    op.drop_index('ix_posts_created_at', table_name='posts')
    op.drop_table('posts')
    op.drop_table('users')

    # finally drop enum type
    notification_type.drop(op.get_bind(), checkfirst=True)
