from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime
from app.db import Base, new_id, utcnow

class Follow(Base):
    """Directed edge: follower sees following's posts. Duplicates are not prevented."""
    __tablename__ = "follows"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    follower_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    following_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
