# -*- coding: utf-8 -*-
"""User Repository Interface"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.user import User


class UserRepository(ABC):
    """사용자(자격 증명) 저장소 인터페이스"""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """이메일로 조회 (대소문자 무시)"""
        ...

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        ...
