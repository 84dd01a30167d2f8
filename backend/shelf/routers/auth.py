from fastapi import APIRouter, Depends, HTTPException, status
import logging

from ..config import Settings
from ..database import Storage
from ..dependencies import (
    get_app_settings, get_storage, get_current_user, get_password_hash, authenticate_user,
    create_access_token,
)
from ..models.user import UserModel
from ..schemas import AuthResponse, LoginRequest, Message, User, UserCreate, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _public(user: User) -> UserPublic:
    return UserPublic.model_validate(user.model_dump())


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    user: UserCreate,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """Create an account and sign it in"""
    # ConflictError on duplicate email is mapped to 409 by the app
    db_user = await UserModel(storage).create(
        name=user.name,
        email=user.email,
        password_hash=get_password_hash(user.password),
    )
    return AuthResponse(token=create_access_token(db_user, settings), user=_public(db_user))


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    user = await authenticate_user(storage, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    logger.info(f"User {user.id} logged in")
    return AuthResponse(token=create_access_token(user, settings), user=_public(user))


@router.post("/logout", response_model=Message)
async def logout():
    # Tokens are stateless; the client discards its copy
    return {"message": "Logged out successfully"}


@router.get("/verify", response_model=UserPublic)
async def verify(current_user: User = Depends(get_current_user)):
    """Return the user the bearer token belongs to"""
    return _public(current_user)
