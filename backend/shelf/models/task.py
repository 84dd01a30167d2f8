from collections import Counter
from typing import List

from ..schemas import Task, TaskStats
from .base import OwnedRecordModel


class TaskModel(OwnedRecordModel[Task]):
    record_type = Task
    store_name = "tasks"
    label = "task"

    async def get_by_status(self, status: str, user_id: str) -> List[Task]:
        return [t for t in await self.get_all(user_id) if t.status == status]

    async def get_by_date(self, due_date: str, user_id: str) -> List[Task]:
        # Calendar-date strings compare exactly
        return [t for t in await self.get_all(user_id) if t.due_date == due_date]

    async def get_stats(self, user_id: str) -> TaskStats:
        tasks = await self.get_all(user_id)
        statuses = Counter(t.status for t in tasks)
        return TaskStats(
            total=len(tasks),
            todo=statuses["todo"],
            doing=statuses["doing"],
            done=statuses["done"],
            tasks_by_date=dict(Counter(t.due_date for t in tasks)),
        )
