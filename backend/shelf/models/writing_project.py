import logging
from typing import Optional

from ..schemas import ContentDocument, WritingProject
from .base import OwnedRecordModel

logger = logging.getLogger(__name__)


class WritingProjectModel(OwnedRecordModel[WritingProject]):
    record_type = WritingProject
    store_name = "writing_projects"
    label = "writing project"

    @property
    def notebook(self):
        return self.storage.notebook_content

    async def on_delete(self, record: WritingProject) -> None:
        await self.notebook.delete(record.id)

    async def update_word_count(
        self, project_id: str, word_count: int, user_id: str
    ) -> Optional[WritingProject]:
        return await self.update(project_id, {"current_word_count": word_count}, user_id)

    async def get_notebook_content(
        self, project_id: str, user_id: str
    ) -> Optional[ContentDocument]:
        """Notebook body of one of the user's projects; empty default if never saved.

        Returns None when the project does not exist for this user.
        """
        if await self.get_by_id(project_id, user_id) is None:
            return None
        return await self.notebook.get(project_id) or ContentDocument()

    async def save_notebook_content(
        self,
        project_id: str,
        user_id: str,
        content: str,
        word_count: int,
        theme: str = "classic",
    ) -> Optional[ContentDocument]:
        """Persist the notebook body and record its word count on the project.

        Both writes belong to one save: the notebook file is overwritten, then
        the project's ``currentWordCount`` is set to ``word_count``. Returns
        None (and writes nothing) when the project does not exist for this user.
        """
        if await self.get_by_id(project_id, user_id) is None:
            return None
        document = await self.notebook.save(project_id, content, word_count, theme)
        if await self.update_word_count(project_id, word_count, user_id) is None:
            # Project removed between the two writes
            logger.warning(f"Notebook saved for missing project {project_id}")
            await self.notebook.delete(project_id)
            return None
        return document
