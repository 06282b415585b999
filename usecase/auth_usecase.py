"""Auth Usecase - 회원가입, 로그인, 토큰 검증"""
import logging
import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
from jose import JWTError, jwt

from config.item import JWT_ALGORITHM, JWT_EXPIRES_DAYS, JWT_SECRET
from domain.entities.user import User
from domain.exceptions import AuthError
from domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

INVALID_CREDENTIALS_MESSAGE = '이메일 또는 비밀번호가 올바르지 않습니다.'


class AuthUsecase:
    """인증 Usecase (bcrypt 해시 + HS256 JWT)"""

    def __init__(
            self,
            user_repo: UserRepository,
            secret: str = JWT_SECRET,
            expires_days: int = JWT_EXPIRES_DAYS,
    ):
        self.user_repo = user_repo
        self.secret = secret
        self.expires_days = expires_days

    # === 토큰 ===

    def issue_token(self, user: User, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            'userId': user.id,
            'email': user.email,
            'iat': int(now.timestamp()),
            'exp': int((now + timedelta(days=self.expires_days)).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> User:
        """
        토큰 검증

        Returns:
            User: 토큰 주인

        Raises:
            AuthError: 서명 오류, 만료, 알 수 없는 사용자
        """
        if not token:
            raise AuthError('인증 토큰이 없습니다.')
        try:
            claims = jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            raise AuthError('유효하지 않은 토큰입니다.') from e

        user = self.user_repo.find_by_id(claims.get('userId'))
        if user is None:
            raise AuthError('유효하지 않은 토큰입니다.')
        return user

    # === 가입 / 로그인 ===

    def signup(self, email: str, password: str, name: str) -> Tuple[User, str]:
        """
        회원가입

        Returns:
            (user, token)

        Raises:
            ValueError: 입력값 누락, 이메일 형식 오류, 비밀번호 길이 부족
            AuthError: 이미 존재하는 이메일
        """
        email = (email or '').strip()
        name = (name or '').strip()
        if not email or not password or not name:
            raise ValueError('모든 필드를 입력해주세요.')
        if not _EMAIL_PATTERN.match(email):
            raise ValueError('올바른 이메일 형식이 아닙니다.')
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'비밀번호는 {MIN_PASSWORD_LENGTH}자 이상이어야 합니다.')
        if self.user_repo.find_by_email(email):
            raise AuthError('이미 존재하는 이메일입니다.')

        password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')
        user = self.user_repo.save(User(
            user_id=str(uuid.uuid4()),
            email=email,
            name=name,
            password_hash=password_hash,
        ))
        logger.info(f"회원가입: {user.email}")
        return user, self.issue_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        로그인

        Raises:
            AuthError: 이메일/비밀번호 불일치 (어느 쪽이 틀렸는지 구분하지 않음)
        """
        if not email or not password:
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        user = self.user_repo.find_by_email(email)
        if user is None:
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)
        if not bcrypt.checkpw(password.encode('utf-8'), user.password_hash.encode('utf-8')):
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)
        return user, self.issue_token(user)
