from __future__ import annotations
from typing import Any, Optional

from sqlalchemy import select

from app.models import Post
from app.repositories.base import BaseRepository

class PostRepository(BaseRepository[Post]):
    model = Post

    def get_all(self, *, limit: int = 50) -> list[Post]:
        """Most recently created posts, newest first."""
        stmt = select(Post).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def get_by_user(self, user_id: str) -> list[Post]:
        rows = self.db.execute(select(Post).where(Post.user_id == user_id)).scalars().all()
        return sorted(rows, key=lambda p: p.created_at, reverse=True)

    def get_by_following(self, user_ids: list[str], *, limit: int = 50) -> list[Post]:
        if not user_ids:
            return []
        stmt = (
            select(Post)
            .where(Post.user_id.in_(set(user_ids)))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: str, *, content: str, exercise: dict[str, Any], timestamp: str) -> Post:
        post = Post(user_id=user_id, content=content, exercise=exercise, timestamp=timestamp)
        return self.add_and_refresh(post)

    def update(
        self,
        post_id: str,
        *,
        content: str | None = None,
        exercise: dict[str, Any] | None = None,
    ) -> Optional[Post]:
        # Last write wins; no version check against a concurrent delete
        post = self.get(post_id)
        if not post:
            return None
        if content is not None:
            post.content = content
        if exercise is not None:
            post.exercise = exercise
        self.db.commit()
        self.db.refresh(post)
        return post

    def delete(self, post_id: str) -> bool:
        # Likes and comments on the post are not touched
        return self.delete_by_id(post_id)
