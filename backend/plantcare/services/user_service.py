"""
User Service - demo-mode user records keyed by phone
"""
import logging
from typing import Dict, Optional

from ..models.user import User

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    def __init__(self):
        self._users: Dict[str, User] = {}

    def get(self, phone: str) -> Optional[User]:
        return self._users.get(phone)

    def save(self, user: User) -> User:
        self._users[user.phone] = user
        return user

    def clear(self) -> None:
        self._users.clear()

    def __len__(self):
        return len(self._users)


class UserService:
    def __init__(self, store: InMemoryUserStore, default_name: str = "Farmer"):
        self.store = store
        self.default_name = default_name

    def register(self, name: str, phone: str) -> User:
        """Create a user for phone; an earlier record for the same phone is replaced"""
        if self.store.get(phone):
            logger.info(f"Re-registering existing phone {phone}")
        user = self.store.save(User(name=name, phone=phone))
        logger.info(f"👤 User registered: {user.id} ({phone})")
        return user

    def get_or_create(self, phone: str) -> User:
        """Return the user for phone, creating one with the default name if missing"""
        user = self.store.get(phone)
        if user:
            return user

        user = self.store.save(User(name=self.default_name, phone=phone))
        logger.info(f"👤 User created on sign-in: {user.id} ({phone})")
        return user
