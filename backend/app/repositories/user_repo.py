# app/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError

from app.models import User
from app.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def list(self, *, limit: int = 50) -> list[User]:
        stmt = select(User).order_by(User.created_at.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def search(self, query: str, *, exclude_id: str | None = None, limit: int = 50) -> list[User]:
        """Case-insensitive substring match on display name or username."""
        pattern = f"%{query.strip().lower()}%"
        stmt = select(User).where(
            or_(func.lower(User.display_name).like(pattern), func.lower(User.username).like(pattern))
        )
        if exclude_id:
            stmt = stmt.where(User.id != exclude_id)
        stmt = stmt.order_by(User.display_name.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def create(
        self,
        *,
        id: str,
        email: str,
        display_name: str,
        username: str,
        bio: str = "",
        avatar: str = "",
    ) -> User:
        user = User(id=id, email=email, display_name=display_name, username=username, bio=bio, avatar=avatar)
        try:
            return self.add_and_refresh(user)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the router maps to 400
            raise ValueError("user_already_exists")

    def update(self, user_id: str, **fields) -> Optional[User]:
        """Profile-settings save; None values are left untouched."""
        user = self.get(user_id)
        if not user:
            return None
        for key, value in fields.items():
            if value is not None:
                setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user
