from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from ..exceptions import ValidationError
from ..schemas import QuickNote
from .base import OwnedRecordModel

MAX_QUICK_NOTES = 8
MAX_WORDS = 15


def check_word_limit(content: str) -> None:
    if len(content.split()) > MAX_WORDS:
        raise ValidationError(f"Quick note cannot exceed {MAX_WORDS} words")


class QuickNoteModel(OwnedRecordModel[QuickNote]):
    record_type = QuickNote
    store_name = "quick_notes"
    label = "quick note"

    def on_create(self, record: QuickNote, records: List[QuickNote]) -> QuickNote:
        owned = sum(1 for r in records if r.user_id == record.user_id)
        if owned >= MAX_QUICK_NOTES:
            raise ValidationError(f"Maximum of {MAX_QUICK_NOTES} quick notes allowed")
        if not record.content.strip():
            raise ValidationError("Content and color are required")
        check_word_limit(record.content)
        record.content = record.content.strip()
        return record

    async def update(
        self, note_id: str, data: Union[BaseModel, Dict[str, Any]], user_id: str
    ) -> Optional[QuickNote]:
        patch = self._patch(data)
        # Blank content leaves the stored text unchanged
        content = (patch.pop("content", None) or "").strip()
        if content:
            check_word_limit(content)
            patch["content"] = content
        return await super().update(note_id, patch, user_id)

    async def get_count(self, user_id: str) -> int:
        return len(await self.get_all(user_id))
