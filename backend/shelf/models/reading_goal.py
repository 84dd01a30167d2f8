from datetime import date
from typing import Any, Dict, List, Optional

from ..schemas import ReadingGoal
from .base import OwnedRecordModel


def deactivate_others(records: List[ReadingGoal], keep: ReadingGoal) -> None:
    """At most one active goal per (user, year)."""
    for goal in records:
        if goal.id != keep.id and goal.user_id == keep.user_id and goal.year == keep.year:
            goal.is_active = False


class ReadingGoalModel(OwnedRecordModel[ReadingGoal]):
    record_type = ReadingGoal
    store_name = "reading_goals"
    label = "reading goal"

    def on_create(self, record: ReadingGoal, records: List[ReadingGoal]) -> ReadingGoal:
        record.is_active = True
        deactivate_others(records, record)
        return record

    def on_update(
        self,
        current: ReadingGoal,
        updated: ReadingGoal,
        patch: Dict[str, Any],
        records: List[ReadingGoal],
    ) -> ReadingGoal:
        # An active goal moved to another year is the only active one there
        if updated.is_active and ("is_active" in patch or "year" in patch):
            deactivate_others(records, updated)
        return updated

    async def get_active_goal(self, user_id: str, year: Optional[int] = None) -> Optional[ReadingGoal]:
        year = year or date.today().year
        for goal in await self.get_all(user_id):
            if goal.year == year and goal.is_active:
                return goal
        return None

    async def get_by_year(self, year: int, user_id: str) -> Optional[ReadingGoal]:
        goals = [g for g in await self.get_all(user_id) if g.year == year]
        active = [g for g in goals if g.is_active]
        return (active or goals or [None])[0]
