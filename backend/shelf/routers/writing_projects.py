from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..database import Storage
from ..dependencies import get_current_user, get_storage
from ..models.writing_project import WritingProjectModel
from ..schemas import (
    ContentDocument, ContentSave, SuccessResponse, User, WordCountUpdate, WritingProject,
    WritingProjectCreate, WritingProjectUpdate,
)

router = APIRouter(prefix="/writing-projects", tags=["writing-projects"])


def get_projects(storage: Storage = Depends(get_storage)) -> WritingProjectModel:
    return WritingProjectModel(storage)


@router.get("", response_model=List[WritingProject])
async def get_all_projects(
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    return await projects.get_all(current_user.id)


@router.get("/{project_id}", response_model=WritingProject)
async def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    project = await projects.get_by_id(project_id, current_user.id)
    if not project:
        raise HTTPException(status_code=404, detail="Writing project not found")
    return project


@router.post("", response_model=WritingProject, status_code=201)
async def create_project(
    project: WritingProjectCreate,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    return await projects.create(project, current_user.id)


@router.put("/{project_id}", response_model=WritingProject)
async def update_project(
    project_id: str,
    data: WritingProjectUpdate,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    project = await projects.update(project_id, data, current_user.id)
    if not project:
        raise HTTPException(status_code=404, detail="Writing project not found")
    return project


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    if not await projects.delete(project_id, current_user.id):
        raise HTTPException(status_code=404, detail="Writing project not found")
    return Response(status_code=204)


@router.patch("/{project_id}/word-count", response_model=WritingProject)
async def update_word_count(
    project_id: str,
    data: WordCountUpdate,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    project = await projects.update_word_count(project_id, data.word_count, current_user.id)
    if not project:
        raise HTTPException(status_code=404, detail="Writing project not found")
    return project


@router.get("/{project_id}/content", response_model=ContentDocument)
async def get_notebook_content(
    project_id: str,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    content = await projects.get_notebook_content(project_id, current_user.id)
    if content is None:
        raise HTTPException(status_code=404, detail="Writing project not found")
    return content


@router.post("/{project_id}/content", response_model=SuccessResponse)
async def save_notebook_content(
    project_id: str,
    data: ContentSave,
    current_user: User = Depends(get_current_user),
    projects: WritingProjectModel = Depends(get_projects),
):
    """Save the notebook body; also sets the project's currentWordCount"""
    saved = await projects.save_notebook_content(
        project_id, current_user.id, data.content, data.word_count, data.theme
    )
    if saved is None:
        raise HTTPException(status_code=404, detail="Writing project not found")
    return SuccessResponse()
