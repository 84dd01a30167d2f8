from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..database import Storage
from ..dependencies import get_current_user, get_storage
from ..models.journal import JournalModel
from ..schemas import (
    ContentDocument, ContentSave, Journal, JournalCreate, JournalUpdate, SuccessResponse, User,
)

router = APIRouter(prefix="/journals", tags=["journals"])


def get_journals(storage: Storage = Depends(get_storage)) -> JournalModel:
    return JournalModel(storage)


@router.get("", response_model=List[Journal])
async def get_all_journals(
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    return await journals.get_all(current_user.id)


@router.get("/{journal_id}", response_model=Journal)
async def get_journal(
    journal_id: str,
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    journal = await journals.get_by_id(journal_id, current_user.id)
    if not journal:
        raise HTTPException(status_code=404, detail="Journal not found")
    return journal


@router.post("", response_model=Journal, status_code=201)
async def create_journal(
    journal: JournalCreate,
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    return await journals.create(journal, current_user.id)


@router.put("/{journal_id}", response_model=Journal)
async def update_journal(
    journal_id: str,
    data: JournalUpdate,
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    journal = await journals.update(journal_id, data, current_user.id)
    if not journal:
        raise HTTPException(status_code=404, detail="Journal not found")
    return journal


@router.delete("/{journal_id}", status_code=204)
async def delete_journal(
    journal_id: str,
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    if not await journals.delete(journal_id, current_user.id):
        raise HTTPException(status_code=404, detail="Journal not found")
    return Response(status_code=204)


@router.get("/{journal_id}/content", response_model=ContentDocument)
async def get_journal_content(
    journal_id: str,
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    content = await journals.get_content(journal_id, current_user.id)
    if content is None:
        raise HTTPException(status_code=404, detail="Journal not found")
    return content


@router.post("/{journal_id}/content", response_model=SuccessResponse)
async def save_journal_content(
    journal_id: str,
    data: ContentSave,
    current_user: User = Depends(get_current_user),
    journals: JournalModel = Depends(get_journals),
):
    saved = await journals.save_content(
        journal_id, current_user.id, data.content, data.word_count, data.theme
    )
    if saved is None:
        raise HTTPException(status_code=404, detail="Journal not found")
    return SuccessResponse()
