from app.models.user import User
from app.models.post import Post
from app.models.like import Like
from app.models.comment import Comment
from app.models.follow import Follow
from app.models.custom_exercise import CustomExercise
from app.models.notification import Notification, NotificationType
from app.models.days_goal import DaysGoal

__all__ = [
    "User",
    "Post",
    "Like",
    "Comment",
    "Follow",
    "CustomExercise",
    "Notification",
    "NotificationType",
    "DaysGoal",
]
