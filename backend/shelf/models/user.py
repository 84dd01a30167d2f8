import logging
from typing import Optional

from ..database import Storage
from ..exceptions import ConflictError
from ..schemas import User, utc_now
from .base import new_id

logger = logging.getLogger(__name__)


class UserModel:
    """Accounts. Not owned by anyone, so it does not share the per-user contract."""

    def __init__(self, storage: Storage):
        self.store = storage.users

    async def get_by_id(self, user_id: str) -> Optional[User]:
        for user in await self.store.load():
            if user.id == user_id:
                return user
        return None

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in await self.store.load():
            if user.email == email:
                return user
        return None

    async def create(self, name: str, email: str, password_hash: str) -> User:
        async with self.store.transaction() as users:
            if any(u.email == email for u in users):
                raise ConflictError("User with this email already exists")
            user = User(
                id=new_id(),
                name=name,
                email=email,
                password_hash=password_hash,
                created_at=utc_now(),
            )
            users.append(user)

        logger.info(f"Registered user {user.id}")
        return user
