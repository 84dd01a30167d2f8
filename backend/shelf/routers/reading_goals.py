from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from ..database import Storage
from ..dependencies import get_current_user, get_storage
from ..models.reading_goal import ReadingGoalModel
from ..schemas import ReadingGoal, ReadingGoalCreate, ReadingGoalUpdate, User

router = APIRouter(prefix="/reading-goals", tags=["reading-goals"])


def get_goals(storage: Storage = Depends(get_storage)) -> ReadingGoalModel:
    return ReadingGoalModel(storage)


@router.get("", response_model=List[ReadingGoal])
async def get_all_reading_goals(
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    return await goals.get_all(current_user.id)


@router.get("/active", response_model=Optional[ReadingGoal])
async def get_active_reading_goal(
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    """Active goal for the current year, or null"""
    return await goals.get_active_goal(current_user.id)


@router.get("/year/{year}", response_model=Optional[ReadingGoal])
async def get_reading_goal_by_year(
    year: int,
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    return await goals.get_by_year(year, current_user.id)


@router.get("/{goal_id}", response_model=ReadingGoal)
async def get_reading_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    goal = await goals.get_by_id(goal_id, current_user.id)
    if not goal:
        raise HTTPException(status_code=404, detail="Reading goal not found")
    return goal


@router.post("", response_model=ReadingGoal, status_code=201)
async def create_reading_goal(
    goal: ReadingGoalCreate,
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    return await goals.create(goal, current_user.id)


@router.put("/{goal_id}", response_model=ReadingGoal)
async def update_reading_goal(
    goal_id: str,
    data: ReadingGoalUpdate,
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    goal = await goals.update(goal_id, data, current_user.id)
    if not goal:
        raise HTTPException(status_code=404, detail="Reading goal not found")
    return goal


@router.delete("/{goal_id}", status_code=204)
async def delete_reading_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    goals: ReadingGoalModel = Depends(get_goals),
):
    if not await goals.delete(goal_id, current_user.id):
        raise HTTPException(status_code=404, detail="Reading goal not found")
    return Response(status_code=204)
