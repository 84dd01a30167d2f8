from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..database import Storage
from ..dependencies import get_current_user, get_storage
from ..models.quick_note import QuickNoteModel
from ..schemas import CountResponse, QuickNote, QuickNoteCreate, QuickNoteUpdate, User

router = APIRouter(prefix="/quick-notes", tags=["quick-notes"])


def get_quick_notes(storage: Storage = Depends(get_storage)) -> QuickNoteModel:
    return QuickNoteModel(storage)


@router.get("", response_model=List[QuickNote])
async def get_all_quick_notes(
    current_user: User = Depends(get_current_user),
    quick_notes: QuickNoteModel = Depends(get_quick_notes),
):
    return await quick_notes.get_all(current_user.id)


@router.get("/count", response_model=CountResponse)
async def get_quick_notes_count(
    current_user: User = Depends(get_current_user),
    quick_notes: QuickNoteModel = Depends(get_quick_notes),
):
    return CountResponse(count=await quick_notes.get_count(current_user.id))


@router.get("/{note_id}", response_model=QuickNote)
async def get_quick_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    quick_notes: QuickNoteModel = Depends(get_quick_notes),
):
    note = await quick_notes.get_by_id(note_id, current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Quick note not found")
    return note


@router.post("", response_model=QuickNote, status_code=201)
async def create_quick_note(
    note: QuickNoteCreate,
    current_user: User = Depends(get_current_user),
    quick_notes: QuickNoteModel = Depends(get_quick_notes),
):
    """Cap and word-limit violations come back as 400"""
    return await quick_notes.create(note, current_user.id)


@router.put("/{note_id}", response_model=QuickNote)
async def update_quick_note(
    note_id: str,
    data: QuickNoteUpdate,
    current_user: User = Depends(get_current_user),
    quick_notes: QuickNoteModel = Depends(get_quick_notes),
):
    note = await quick_notes.update(note_id, data, current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Quick note not found")
    return note


@router.delete("/{note_id}", status_code=204)
async def delete_quick_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    quick_notes: QuickNoteModel = Depends(get_quick_notes),
):
    if not await quick_notes.delete(note_id, current_user.id):
        raise HTTPException(status_code=404, detail="Quick note not found")
    return Response(status_code=204)
