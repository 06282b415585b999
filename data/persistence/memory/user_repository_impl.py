"""User Repository Implementation (in-memory)"""
from threading import Lock
from typing import Dict, Optional

from domain.entities.user import User
from domain.repositories.user_repository import UserRepository


class InMemoryUserRepositoryImpl(UserRepository):
    """프로세스 메모리에 사용자를 보관하는 저장소 (재시작 시 초기화)"""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = Lock()

    def find_by_email(self, email: str) -> Optional[User]:
        email = (email or '').strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        return None

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def save(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
        return user

    def count(self) -> int:
        with self._lock:
            return len(self._users)
