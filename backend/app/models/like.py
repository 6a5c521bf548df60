from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime
from app.db import Base, new_id, utcnow

class Like(Base):
    __tablename__ = "likes"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    # No foreign keys: deleting a post leaves its likes behind
    post_id: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
