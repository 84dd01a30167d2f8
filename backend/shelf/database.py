"""Flat-file persistence.

Every entity type lives in a single JSON array file under ``DATA_DIR``. Each
operation loads the whole array, mutates it in memory and rewrites the file.
Writers to the same file are serialized through one ``asyncio.Lock`` per file,
so read-modify-write cycles inside ``JsonStore.transaction()`` never lose each
other's updates within a process.

Large free-text bodies (journal and notebook content) are stored as one JSON
document per parent id, and uploaded binaries as plain files named after the
owning entity id.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import Settings
from .schemas import (
    Book, ContentDocument, Journal, Note, QuickNote, ReadingGoal, Task, User,
    VisionBoard, WritingProject, utc_now,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_locks: Dict[Path, asyncio.Lock] = {}


def _lock_for(path: Path) -> asyncio.Lock:
    key = path.resolve()
    if key not in _locks:
        _locks[key] = asyncio.Lock()
    return _locks[key]


def _dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class JsonStore(Generic[T]):
    """One JSON array file holding every record of one entity type."""

    def __init__(self, path: Path, record_type: Type[T]):
        self.path = Path(path)
        self.record_type = record_type

    @property
    def lock(self) -> asyncio.Lock:
        return _lock_for(self.path)

    def _read(self) -> List[T]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Could not read {self.path}: {e}")
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unparsable store {self.path}: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Ignoring store {self.path}: expected a JSON array")
            return []

        records = []
        for i, item in enumerate(data):
            try:
                records.append(self.record_type.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping invalid record {i} in {self.path}: {e}")
        return records

    def _write(self, records: List[T]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [_dump(record) for record in records]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    async def load(self) -> List[T]:
        """Return every valid stored record; an absent or unusable file loads as empty."""
        return await asyncio.to_thread(self._read)

    async def save(self, records: List[T]) -> None:
        """Overwrite the whole file with ``records``."""
        await asyncio.to_thread(self._write, records)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[List[T]]:
        """Hold the file lock across load, mutation and save.

        The yielded list is written back when the block exits normally. If the
        block raises, nothing is written.
        """
        async with self.lock:
            records = await self.load()
            yield records
            await self.save(records)


class ContentStore:
    """Free-text bodies keyed by parent id, one JSON file each."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, parent_id: str) -> Path:
        return self.directory / f"{Path(parent_id).name}.json"

    def _read(self, parent_id: str) -> Optional[ContentDocument]:
        try:
            raw = self._path(parent_id).read_text(encoding="utf-8")
            return ContentDocument.model_validate(json.loads(raw))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read content for {parent_id}: {e}")
            return None

    def _write(self, parent_id: str, document: ContentDocument) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(parent_id).write_text(
            json.dumps(_dump(document), indent=2), encoding="utf-8"
        )

    async def get(self, parent_id: str) -> Optional[ContentDocument]:
        return await asyncio.to_thread(self._read, parent_id)

    async def save(
        self, parent_id: str, content: str, word_count: int, theme: str = "classic"
    ) -> ContentDocument:
        document = ContentDocument(
            content=content, word_count=word_count, theme=theme, updated_at=utc_now()
        )
        async with _lock_for(self.directory):
            await asyncio.to_thread(self._write, parent_id, document)
        return document

    async def delete(self, parent_id: str) -> None:
        try:
            await asyncio.to_thread(self._path(parent_id).unlink)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to delete content for {parent_id}: {e}")


@dataclass
class UploadedFile:
    """Raw upload handed to the model layer by the HTTP boundary."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class AssetStore:
    """Uploaded files for one entity type, named after the owning entity id."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def file_name(self, entity_id: str, original_name: str, keep_name: bool = False) -> str:
        original_name = Path(original_name or "").name
        if keep_name:
            return f"{entity_id}-{original_name}"
        return f"{entity_id}{Path(original_name).suffix}"

    def path_of(self, file_name: str) -> Path:
        return self.directory / Path(file_name).name

    def _write(self, file_name: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_of(file_name).write_bytes(data)

    def _listing(self) -> List[str]:
        try:
            return sorted(p.name for p in self.directory.iterdir() if p.is_file())
        except FileNotFoundError:
            return []

    async def save(
        self, entity_id: str, data: bytes, original_name: str, keep_name: bool = False
    ) -> str:
        """Write ``data`` and return the stored file name."""
        file_name = self.file_name(entity_id, original_name, keep_name)
        await asyncio.to_thread(self._write, file_name, data)
        logger.info(f"Stored upload {file_name} ({len(data)} bytes)")
        return file_name

    async def resolve(
        self, entity_id: str, fallback_name: Optional[str] = None
    ) -> Optional[Path]:
        files = await asyncio.to_thread(self._listing)
        match = next((f for f in files if f.startswith(entity_id)), None)
        if match is None and f"{entity_id}.pdf" in files:
            match = f"{entity_id}.pdf"
        if match is None and fallback_name and Path(fallback_name).name in files:
            match = Path(fallback_name).name
        return self.path_of(match) if match else None

    async def delete_file(self, file_name: str) -> None:
        try:
            await asyncio.to_thread(self.path_of(file_name).unlink)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to delete file {file_name}: {e}")

    async def delete(self, entity_id: str) -> None:
        files = await asyncio.to_thread(self._listing)
        for name in files:
            if name.startswith(entity_id):
                await self.delete_file(name)


class Storage:
    """All stores of one deployment, rooted at the configured directories."""

    RECORD_FILES = {
        "users": ("users.json", User),
        "books": ("books.json", Book),
        "journals": ("journals.json", Journal),
        "tasks": ("tasks.json", Task),
        "notes": ("notes.json", Note),
        "quick_notes": ("quick-notes.json", QuickNote),
        "reading_goals": ("reading-goals.json", ReadingGoal),
        "writing_projects": ("writing-projects.json", WritingProject),
        "vision_boards": ("vision-boards.json", VisionBoard),
    }

    def __init__(self, data_dir: Path, uploads_dir: Path):
        self.data_dir = Path(data_dir)
        self.uploads_dir = Path(uploads_dir)

        self.users: JsonStore[User] = self._store("users")
        self.books: JsonStore[Book] = self._store("books")
        self.journals: JsonStore[Journal] = self._store("journals")
        self.tasks: JsonStore[Task] = self._store("tasks")
        self.notes: JsonStore[Note] = self._store("notes")
        self.quick_notes: JsonStore[QuickNote] = self._store("quick_notes")
        self.reading_goals: JsonStore[ReadingGoal] = self._store("reading_goals")
        self.writing_projects: JsonStore[WritingProject] = self._store("writing_projects")
        self.vision_boards: JsonStore[VisionBoard] = self._store("vision_boards")

        self.journal_content = ContentStore(self.data_dir / "journal-content")
        self.notebook_content = ContentStore(self.data_dir / "notebook-content")

        self.book_files = AssetStore(self.uploads_dir / "books")
        self.vision_images = AssetStore(self.uploads_dir / "vision-boards")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Storage":
        return cls(settings.DATA_DIR, settings.UPLOADS_DIR)

    def _store(self, name: str) -> JsonStore:
        file_name, record_type = self.RECORD_FILES[name]
        return JsonStore(self.data_dir / file_name, record_type)

    def initialize(self) -> None:
        """Create every storage directory. Called once at startup."""
        for directory in (
            self.data_dir,
            self.journal_content.directory,
            self.notebook_content.directory,
            self.book_files.directory,
            self.vision_images.directory,
        ):
            directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Storage ready at {self.data_dir} (uploads: {self.uploads_dir})")

    async def clear_data(self) -> List[str]:
        """Reset every entity file except users to an empty array."""
        cleared = []
        for name in self.RECORD_FILES:
            if name == "users":
                continue
            store: JsonStore = getattr(self, name)
            async with store.lock:
                await store.save([])
            cleared.append(store.path.name)
            logger.info(f"Cleared {store.path.name}")
        return cleared
