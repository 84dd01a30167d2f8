from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from ..database import Storage
from ..dependencies import get_current_user, get_storage
from ..models.note import NoteModel
from ..schemas import Message, Note, NoteCreate, NoteUpdate, User

router = APIRouter(prefix="/notes", tags=["notes"])


def get_notes(storage: Storage = Depends(get_storage)) -> NoteModel:
    return NoteModel(storage)


@router.get("", response_model=List[Note])
async def get_all_notes(
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    return await notes.get_all(current_user.id)


@router.get("/pinned", response_model=List[Note])
async def get_pinned_notes(
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    return await notes.get_pinned(current_user.id)


@router.get("/search", response_model=List[Note])
async def search_notes(
    q: str = Query("", description="Text to look for in title, content and tags"),
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return await notes.search(q, current_user.id)


@router.get("/{note_id}", response_model=Note)
async def get_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    note = await notes.get_by_id(note_id, current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.post("", response_model=Note, status_code=201)
async def create_note(
    note: NoteCreate,
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    return await notes.create(note, current_user.id)


@router.put("/{note_id}", response_model=Note)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    note = await notes.update(note_id, data, current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.delete("/{note_id}", response_model=Message)
async def delete_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    notes: NoteModel = Depends(get_notes),
):
    if not await notes.delete(note_id, current_user.id):
        raise HTTPException(status_code=404, detail="Note not found")
    return {"message": "Note deleted successfully"}
