from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from ..database import Storage
from ..dependencies import get_app_settings, get_current_user, get_storage, read_upload
from ..models.book import BookModel
from ..schemas import Book, BookCreate, BookStats, BookStatus, BookUpdate, User

router = APIRouter(prefix="/books", tags=["books"])


def get_books(storage: Storage = Depends(get_storage)) -> BookModel:
    return BookModel(storage)


def _form_model(model, values: dict):
    # Form fields arrive loose; validate them like a JSON body would be
    try:
        return model.model_validate({k: v for k, v in values.items() if v is not None})
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


@router.get("", response_model=List[Book])
async def get_all_books(
    current_user: User = Depends(get_current_user),
    books: BookModel = Depends(get_books),
):
    return await books.get_all(current_user.id)


@router.get("/stats", response_model=BookStats)
async def get_book_stats(
    current_user: User = Depends(get_current_user),
    books: BookModel = Depends(get_books),
):
    return await books.get_stats(current_user.id)


@router.get("/status/{status}", response_model=List[Book])
async def get_books_by_status(
    status: BookStatus,
    current_user: User = Depends(get_current_user),
    books: BookModel = Depends(get_books),
):
    return await books.get_by_status(status, current_user.id)


@router.get("/{book_id}", response_model=Book)
async def get_book(
    book_id: str,
    current_user: User = Depends(get_current_user),
    books: BookModel = Depends(get_books),
):
    book = await books.get_by_id(book_id, current_user.id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.post("", response_model=Book, status_code=201)
async def create_book(
    title: str = Form(...),
    author: str = Form(...),
    genre: str = Form(...),
    status: str = Form("want_to_read"),
    rating: Optional[int] = Form(None),
    notes: Optional[str] = Form(None),
    current_page: Optional[int] = Form(None, alias="currentPage"),
    total_pages: Optional[int] = Form(None, alias="totalPages"),
    pdf: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    books: BookModel = Depends(get_books),
):
    """Create a book from a multipart form, with an optional PDF"""
    data = _form_model(BookCreate, {
        "title": title, "author": author, "genre": genre, "status": status,
        "rating": rating, "notes": notes,
        "current_page": current_page, "total_pages": total_pages,
    })
    upload = await read_upload(pdf, "application/pdf", settings.MAX_PDF_SIZE, "PDF")
    return await books.create(data, current_user.id, pdf=upload)


@router.put("/{book_id}", response_model=Book)
async def update_book(
    book_id: str,
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    genre: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    rating: Optional[int] = Form(None),
    notes: Optional[str] = Form(None),
    current_page: Optional[int] = Form(None, alias="currentPage"),
    total_pages: Optional[int] = Form(None, alias="totalPages"),
    start_date: Optional[datetime] = Form(None, alias="startDate"),
    finish_date: Optional[datetime] = Form(None, alias="finishDate"),
    pdf: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    books: BookModel = Depends(get_books),
):
    data = _form_model(BookUpdate, {
        "title": title, "author": author, "genre": genre, "status": status,
        "rating": rating, "notes": notes,
        "current_page": current_page, "total_pages": total_pages,
        "start_date": start_date, "finish_date": finish_date,
    })
    upload = await read_upload(pdf, "application/pdf", settings.MAX_PDF_SIZE, "PDF")
    book = await books.update(book_id, data, current_user.id, pdf=upload)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.delete("/{book_id}", status_code=204)
async def delete_book(
    book_id: str,
    current_user: User = Depends(get_current_user),
    books: BookModel = Depends(get_books),
):
    if not await books.delete(book_id, current_user.id):
        raise HTTPException(status_code=404, detail="Book not found")
    return Response(status_code=204)


@router.get("/{book_id}/download")
async def download_book_file(
    book_id: str,
    current_user: User = Depends(get_current_user),
    books: BookModel = Depends(get_books),
):
    path = await books.get_file_path(book_id, current_user.id)
    if not path:
        raise HTTPException(status_code=404, detail="Book file not found")
    return FileResponse(path, filename=path.name)
