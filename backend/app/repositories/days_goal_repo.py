from __future__ import annotations
from typing import Optional

from app.models import DaysGoal
from app.repositories.base import BaseRepository

class DaysGoalRepository(BaseRepository[DaysGoal]):
    model = DaysGoal

    def set(self, user_id: str, *, monthly_target: int) -> DaysGoal:
        """Upsert the user's single goal row."""
        goal = self.get(user_id)
        if goal:
            goal.monthly_target = monthly_target
            self.db.commit()
            self.db.refresh(goal)
            return goal
        return self.add_and_refresh(DaysGoal(id=user_id, user_id=user_id, monthly_target=monthly_target))

    def get_for_user(self, user_id: str) -> Optional[DaysGoal]:
        return self.get(user_id)

    def delete(self, user_id: str) -> bool:
        return self.delete_by_id(user_id)
