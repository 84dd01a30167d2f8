from datetime import timedelta
from typing import Optional
from fastapi import Depends, HTTPException, Request, UploadFile, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
import logging

from .config import Settings, get_settings
from .database import Storage, UploadedFile
from .models.user import UserModel
from . import schemas

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 bearer tokens
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{get_settings().API_V1_STR}/auth/login")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

async def authenticate_user(storage: Storage, email: str, password: str):
    user = await UserModel(storage).get_by_email(email)
    if not user:
        return False
    if not verify_password(password, user.password_hash):
        return False
    return user

def create_access_token(
    user: schemas.User, settings: Settings, expires_delta: Optional[timedelta] = None
) -> str:
    expires = schemas.utc_now() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": user.id, "email": user.email, "exp": expires}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

async def get_current_user(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    token: str = Depends(oauth2_scheme)
) -> schemas.User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
        token_data = schemas.TokenData(user_id=user_id, email=payload.get("email"))
    except JWTError:
        raise credentials_exception
    user = await UserModel(storage).get_by_id(token_data.user_id)
    if user is None:
        raise credentials_exception
    return user


async def read_upload(
    upload: Optional[UploadFile], content_type_prefix: str, max_size: int, label: str
) -> Optional[UploadedFile]:
    """Apply the upload filter and read the file into memory.

    ``content_type_prefix`` is matched against the declared MIME type
    (``application/pdf`` for books, ``image/`` for vision boards).
    """
    if upload is None or not upload.filename:
        return None
    if not (upload.content_type or "").startswith(content_type_prefix):
        raise HTTPException(status_code=400, detail=f"Only {label} files are allowed")
    content = await upload.read(max_size + 1)
    if len(content) > max_size:
        raise HTTPException(
            status_code=413, detail=f"File exceeds the {max_size // (1024 * 1024)}MB limit"
        )
    logger.debug(f"Received upload {upload.filename} ({len(content)} bytes)")
    return UploadedFile(
        filename=upload.filename, content=content, content_type=upload.content_type
    )
