from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..database import UploadedFile
from ..schemas import Book, BookCreate, BookStats, BookUpdate, GenreCount, utc_now
from .base import OwnedRecordModel, new_id


class BookModel(OwnedRecordModel[Book]):
    record_type = Book
    store_name = "books"
    label = "book"

    @property
    def files(self):
        return self.storage.book_files

    async def get_by_status(self, status: str, user_id: str) -> List[Book]:
        return [b for b in await self.get_all(user_id) if b.status == status]

    async def create(
        self, data: BookCreate, user_id: str, pdf: Optional[UploadedFile] = None
    ) -> Book:
        book_id = new_id()
        pdf_path = None
        if pdf is not None:
            pdf_path = await self.files.save(book_id, pdf.content, pdf.filename)
        try:
            return await super().create(data, user_id, id=book_id, pdf_path=pdf_path)
        except Exception:
            if pdf_path:
                await self.files.delete_file(pdf_path)
            raise

    async def update(
        self,
        book_id: str,
        data: BookUpdate,
        user_id: str,
        pdf: Optional[UploadedFile] = None,
    ) -> Optional[Book]:
        if pdf is None:
            return await super().update(book_id, data, user_id)

        if await self.get_by_id(book_id, user_id) is None:
            return None
        # Replace whatever file was attached before
        await self.files.delete(book_id)
        pdf_path = await self.files.save(book_id, pdf.content, pdf.filename)
        return await super().update(book_id, data, user_id, pdf_path=pdf_path)

    def on_create(self, record: Book, records: List[Book]) -> Book:
        if record.status == "currently_reading":
            record.start_date = record.created_at
        if record.status == "finished":
            record.finish_date = record.created_at
        return record

    def on_update(
        self, current: Book, updated: Book, patch: Dict[str, Any], records: List[Book]
    ) -> Book:
        status = patch.get("status")
        if status == "currently_reading" and updated.start_date is None:
            updated.start_date = utc_now()
        if status == "finished" and updated.finish_date is None:
            updated.finish_date = utc_now()
        return updated

    async def on_delete(self, record: Book) -> None:
        await self.files.delete(record.id)

    async def get_stats(self, user_id: str) -> BookStats:
        books = await self.get_all(user_id)

        genres = Counter(b.genre for b in books)
        top_genres = sorted(genres.items(), key=lambda item: item[1], reverse=True)[:5]

        ratings = [b.rating for b in books if b.rating is not None]
        average = sum(ratings) / len(ratings) if ratings else 0

        return BookStats(
            total=len(books),
            currently_reading=sum(1 for b in books if b.status == "currently_reading"),
            finished=sum(1 for b in books if b.status == "finished"),
            want_to_read=sum(1 for b in books if b.status == "want_to_read"),
            top_genres=[GenreCount(genre=g, count=c) for g, c in top_genres],
            average_rating=average,
        )

    async def get_file_path(self, book_id: str, user_id: str) -> Optional[Path]:
        """Locate the PDF attached to one of the user's books."""
        book = await self.get_by_id(book_id, user_id)
        if book is None:
            return None
        return await self.files.resolve(book_id, fallback_name=book.pdf_path)
