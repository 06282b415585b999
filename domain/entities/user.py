"""User Entity - 사용자 엔티티"""
from datetime import datetime
from typing import Optional


class User:
    """
    사용자 엔티티

    password_hash는 bcrypt 해시이며 직렬화(to_dict)에 포함되지 않습니다.
    """

    def __init__(
        self,
        user_id: str,
        email: str,
        name: str,
        password_hash: str,
        created_at: Optional[datetime] = None,
    ):
        self.id = user_id
        self.email = (email or '').strip().lower()
        self.name = (name or '').strip()
        self.password_hash = password_hash
        self.created_at = created_at or datetime.now()

        self._validate()

    def _validate(self):
        """비즈니스 규칙 검증"""
        if not self.id:
            raise ValueError("id는 필수입니다")
        if not self.email:
            raise ValueError("email은 필수입니다")
        if not self.name:
            raise ValueError("name은 필수입니다")
        if not self.password_hash:
            raise ValueError("password_hash는 필수입니다")

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'createdAt': self.created_at.isoformat(),
        }

    def __repr__(self):
        return f"User(id={self.id!r}, email={self.email!r})"
