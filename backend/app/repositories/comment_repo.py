from __future__ import annotations

from sqlalchemy import select

from app.models import Comment
from app.repositories.base import BaseRepository

class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def add(self, post_id: str, user_id: str, content: str, parent_id: str | None = None) -> Comment:
        comment = Comment(post_id=post_id, user_id=user_id, content=content, parent_id=parent_id)
        return self.add_and_refresh(comment)

    def get_by_post(self, post_id: str) -> list[Comment]:
        """Oldest first, the order a thread is read in."""
        rows = self.db.execute(select(Comment).where(Comment.post_id == post_id)).scalars().all()
        return sorted(rows, key=lambda c: c.created_at)

    def delete(self, comment_id: str) -> bool:
        return self.delete_by_id(comment_id)
