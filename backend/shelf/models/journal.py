from typing import Optional

from ..schemas import ContentDocument, Journal
from .base import OwnedRecordModel


class JournalModel(OwnedRecordModel[Journal]):
    record_type = Journal
    store_name = "journals"
    label = "journal"

    @property
    def content(self):
        return self.storage.journal_content

    async def on_delete(self, record: Journal) -> None:
        await self.content.delete(record.id)

    async def get_content(self, journal_id: str, user_id: str) -> Optional[ContentDocument]:
        """Body of one of the user's journals; empty default if never saved.

        Returns None when the journal does not exist for this user.
        """
        if await self.get_by_id(journal_id, user_id) is None:
            return None
        return await self.content.get(journal_id) or ContentDocument()

    async def save_content(
        self,
        journal_id: str,
        user_id: str,
        content: str,
        word_count: int,
        theme: str = "classic",
    ) -> Optional[ContentDocument]:
        if await self.get_by_id(journal_id, user_id) is None:
            return None
        return await self.content.save(journal_id, content, word_count, theme)
