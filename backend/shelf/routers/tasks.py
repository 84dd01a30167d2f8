from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..database import Storage
from ..dependencies import get_current_user, get_storage
from ..models.task import TaskModel
from ..schemas import Message, Task, TaskCreate, TaskStats, TaskStatus, TaskUpdate, User

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_tasks(storage: Storage = Depends(get_storage)) -> TaskModel:
    return TaskModel(storage)


@router.get("", response_model=List[Task])
async def get_all_tasks(
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    return await tasks.get_all(current_user.id)


@router.get("/stats", response_model=TaskStats)
async def get_task_stats(
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    return await tasks.get_stats(current_user.id)


@router.get("/status/{status}", response_model=List[Task])
async def get_tasks_by_status(
    status: TaskStatus,
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    return await tasks.get_by_status(status, current_user.id)


@router.get("/date/{due_date}", response_model=List[Task])
async def get_tasks_by_date(
    due_date: str,
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    return await tasks.get_by_date(due_date, current_user.id)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    task = await tasks.get_by_id(task_id, current_user.id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=Task, status_code=201)
async def create_task(
    task: TaskCreate,
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    return await tasks.create(task, current_user.id)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    task = await tasks.update(task_id, data, current_user.id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/{task_id}", response_model=Message)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    tasks: TaskModel = Depends(get_tasks),
):
    if not await tasks.delete(task_id, current_user.id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task deleted successfully"}
