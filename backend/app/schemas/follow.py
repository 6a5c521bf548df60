from datetime import datetime
from app.schemas.base import CamelModel

class FollowRead(CamelModel):
    id: str
    follower_id: str
    following_id: str
    created_at: datetime

class FollowStats(CamelModel):
    followers: int
    following: int
    is_following: bool
