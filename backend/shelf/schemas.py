from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, List, Literal
from datetime import datetime, timezone

BookStatus = Literal["want_to_read", "currently_reading", "finished"]
TaskStatus = Literal["todo", "doing", "done"]
ProjectStatus = Literal["planning", "in_progress", "completed"]
Privacy = Literal["private", "public"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Fields are snake_case in Python and camelCase on disk and on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Stored records

class Record(CamelModel):
    id: str
    created_at: datetime
    updated_at: datetime


class OwnedRecord(Record):
    user_id: str


class User(CamelModel):
    id: str
    name: str
    email: str
    password_hash: str = Field(alias="password")
    created_at: datetime


class UserPublic(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime


class Book(OwnedRecord):
    title: str
    author: str
    genre: str
    status: BookStatus
    rating: Optional[int] = None
    notes: Optional[str] = None
    pdf_path: Optional[str] = None
    current_page: Optional[int] = None
    total_pages: Optional[int] = None
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None


class Journal(OwnedRecord):
    title: str
    description: Optional[str] = None
    cover: Optional[str] = None
    privacy: Privacy = "private"


class Task(OwnedRecord):
    title: str
    description: Optional[str] = None
    status: TaskStatus
    due_date: str


class Note(OwnedRecord):
    title: str
    content: str
    is_pinned: bool = False
    tags: List[str] = Field(default_factory=list)


class QuickNote(OwnedRecord):
    content: str
    color: str


class ReadingGoal(OwnedRecord):
    target_books: int
    target_pages: Optional[int] = None
    year: int
    is_active: bool = True


class WritingProject(OwnedRecord):
    title: str
    description: Optional[str] = None
    type: str
    status: ProjectStatus = "planning"
    current_word_count: int = 0
    target_word_count: Optional[int] = None
    deadline: Optional[datetime] = None


class Position(CamelModel):
    x: float
    y: float


class Size(CamelModel):
    width: float
    height: float


class VisionImage(Record):
    vision_board_id: str
    file_name: str
    file_path: str
    position: Position
    size: Size
    rotation: float = 0
    z_index: int = 0


class VisionBoard(OwnedRecord):
    year: int
    month: int
    title: Optional[str] = None
    description: Optional[str] = None
    images: List[VisionImage] = Field(default_factory=list)


class ContentDocument(CamelModel):
    content: str = ""
    word_count: int = 0
    theme: str = "classic"
    updated_at: Optional[datetime] = None


# Auth

class UserCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    token: str
    user: UserPublic


class TokenData(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None


# Books

class BookCreate(CamelModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    status: BookStatus = "want_to_read"
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    current_page: Optional[int] = Field(None, ge=0)
    total_pages: Optional[int] = Field(None, ge=0)


class BookUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    genre: Optional[str] = Field(None, min_length=1)
    status: Optional[BookStatus] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    current_page: Optional[int] = Field(None, ge=0)
    total_pages: Optional[int] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None


class GenreCount(CamelModel):
    genre: str
    count: int


class BookStats(CamelModel):
    total: int
    currently_reading: int
    finished: int
    want_to_read: int
    top_genres: List[GenreCount]
    average_rating: float


# Journals and notebooks

class JournalCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    cover: Optional[str] = None
    privacy: Privacy = "private"


class JournalUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    cover: Optional[str] = None
    privacy: Optional[Privacy] = None


class ContentSave(CamelModel):
    content: str = Field(..., min_length=1)
    word_count: int = Field(0, ge=0)
    theme: str = "classic"


# Tasks

class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatus
    due_date: str = Field(..., min_length=1)


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[str] = Field(None, min_length=1)


class TaskStats(CamelModel):
    total: int
    todo: int
    doing: int
    done: int
    tasks_by_date: Dict[str, int]


# Notes

class NoteCreate(CamelModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    is_pinned: bool = False
    tags: List[str] = Field(default_factory=list)


class NoteUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    is_pinned: Optional[bool] = None
    tags: Optional[List[str]] = None


# Quick notes

class QuickNoteCreate(CamelModel):
    content: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)


class QuickNoteUpdate(CamelModel):
    content: Optional[str] = None
    color: Optional[str] = Field(None, min_length=1)


class CountResponse(BaseModel):
    count: int


# Reading goals

class ReadingGoalCreate(CamelModel):
    target_books: int = Field(..., gt=0)
    target_pages: Optional[int] = Field(None, ge=0)
    year: int


class ReadingGoalUpdate(CamelModel):
    target_books: Optional[int] = Field(None, gt=0)
    target_pages: Optional[int] = Field(None, ge=0)
    year: Optional[int] = None
    is_active: Optional[bool] = None


# Writing projects

class WritingProjectCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: str = Field(..., min_length=1)
    target_word_count: Optional[int] = Field(None, ge=0)
    deadline: Optional[datetime] = None


class WritingProjectUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1)
    status: Optional[ProjectStatus] = None
    current_word_count: Optional[int] = Field(None, ge=0)
    target_word_count: Optional[int] = Field(None, ge=0)
    deadline: Optional[datetime] = None


class WordCountUpdate(CamelModel):
    word_count: int = Field(..., ge=0)


# Vision boards

class VisionBoardCreate(CamelModel):
    year: int
    month: int = Field(..., ge=1, le=12)
    title: Optional[str] = None
    description: Optional[str] = None


class VisionBoardUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None


class VisionImageUpdate(CamelModel):
    position: Optional[Position] = None
    size: Optional[Size] = None
    rotation: Optional[float] = None
    z_index: Optional[int] = None


class Message(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool = True
