from __future__ import annotations

from sqlalchemy import select

from app.models import Like
from app.repositories.base import BaseRepository

class LikeRepository(BaseRepository[Like]):
    model = Like

    def add(self, post_id: str, user_id: str) -> Like:
        # No existence check: a double submit yields two rows
        return self.add_and_refresh(Like(post_id=post_id, user_id=user_id))

    def remove(self, post_id: str, user_id: str) -> int:
        return self.delete_where(Like.post_id == post_id, Like.user_id == user_id)

    def get_by_post(self, post_id: str) -> list[Like]:
        stmt = select(Like).where(Like.post_id == post_id)
        return list(self.db.execute(stmt).scalars().all())
