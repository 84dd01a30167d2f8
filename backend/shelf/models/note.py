from typing import List

from ..schemas import Note
from .base import OwnedRecordModel


class NoteModel(OwnedRecordModel[Note]):
    record_type = Note
    store_name = "notes"
    label = "note"

    async def search(self, query: str, user_id: str) -> List[Note]:
        """Case-insensitive substring match on title, content and tags."""
        term = query.lower()
        return [
            note for note in await self.get_all(user_id)
            if term in note.title.lower()
            or term in note.content.lower()
            or any(term in tag.lower() for tag in note.tags)
        ]

    async def get_pinned(self, user_id: str) -> List[Note]:
        return [note for note in await self.get_all(user_id) if note.is_pinned]
