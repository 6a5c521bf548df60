from __future__ import annotations

from sqlalchemy import select

from app.models import Follow
from app.repositories.base import BaseRepository

class FollowRepository(BaseRepository[Follow]):
    model = Follow

    @staticmethod
    def _check_pair(follower_id: str | None, following_id: str | None) -> None:
        if not follower_id or not following_id:
            raise ValueError("invalid_follow_parameters")

    def add(self, follower_id: str, following_id: str) -> Follow:
        self._check_pair(follower_id, following_id)
        if follower_id == following_id:
            raise ValueError("cannot_follow_self")
        # Inserted unconditionally; repeated calls create duplicate edges
        return self.add_and_refresh(Follow(follower_id=follower_id, following_id=following_id))

    def remove(self, follower_id: str, following_id: str) -> int:
        """Removes every matching edge, so duplicates go too."""
        self._check_pair(follower_id, following_id)
        return self.delete_where(Follow.follower_id == follower_id, Follow.following_id == following_id)

    def get_followers(self, user_id: str) -> list[str]:
        stmt = select(Follow.follower_id).where(Follow.following_id == user_id)
        return list(self.db.execute(stmt).scalars().all())

    def get_following(self, user_id: str) -> list[str]:
        stmt = select(Follow.following_id).where(Follow.follower_id == user_id)
        return list(self.db.execute(stmt).scalars().all())
