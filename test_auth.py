"""AuthUsecase 테스트 (bcrypt + JWT)"""
import sys
import os
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from data.persistence.memory import InMemoryUserRepositoryImpl
from domain.exceptions import AuthError
from usecase.auth_usecase import INVALID_CREDENTIALS_MESSAGE, AuthUsecase

SECRET = "test-secret"


def create_usecase(expires_days=7):
    return AuthUsecase(user_repo=InMemoryUserRepositoryImpl(), secret=SECRET, expires_days=expires_days)


class TestSignup:
    """회원가입 테스트"""

    def test_signup(self):
        usecase = create_usecase()
        user, token = usecase.signup("User@Example.com", "secret1", "홍길동")

        assert user.email == "user@example.com"
        assert user.password_hash != "secret1"
        assert 'passwordHash' not in user.to_dict()
        assert usecase.user_repo.count() == 1

        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims['userId'] == user.id
        assert claims['email'] == "user@example.com"
        assert claims['exp'] - claims['iat'] == 7 * 24 * 60 * 60

    def test_duplicate_email(self):
        """대소문자만 다른 이메일도 중복"""
        usecase = create_usecase()
        usecase.signup("user@example.com", "secret1", "홍길동")
        with pytest.raises(AuthError) as exc_info:
            usecase.signup("USER@example.com", "secret2", "김철수")
        assert str(exc_info.value) == '이미 존재하는 이메일입니다.'

    def test_validation(self):
        usecase = create_usecase()
        with pytest.raises(ValueError):
            usecase.signup("", "secret1", "홍길동")
        with pytest.raises(ValueError):
            usecase.signup("not-an-email", "secret1", "홍길동")
        with pytest.raises(ValueError):
            usecase.signup("user@example.com", "12345", "홍길동")
        assert usecase.user_repo.count() == 0


class TestLogin:
    """로그인 테스트"""

    def test_login(self):
        usecase = create_usecase()
        signed_up, _ = usecase.signup("user@example.com", "secret1", "홍길동")

        user, token = usecase.login("user@example.com", "secret1")
        assert user.id == signed_up.id
        assert usecase.verify_token(token).id == signed_up.id

    def test_wrong_credentials_same_message(self):
        """이메일/비밀번호 중 어느 쪽이 틀렸는지 구분하지 않음"""
        usecase = create_usecase()
        usecase.signup("user@example.com", "secret1", "홍길동")

        with pytest.raises(AuthError) as wrong_password:
            usecase.login("user@example.com", "wrong-password")
        with pytest.raises(AuthError) as unknown_email:
            usecase.login("nobody@example.com", "secret1")

        assert str(wrong_password.value) == str(unknown_email.value) == INVALID_CREDENTIALS_MESSAGE


class TestVerifyToken:
    """토큰 검증 테스트"""

    def test_empty_token(self):
        with pytest.raises(AuthError):
            create_usecase().verify_token("")

    def test_expired_token(self):
        usecase = create_usecase()
        user, _ = usecase.signup("user@example.com", "secret1", "홍길동")
        expired = usecase.issue_token(user, now=datetime.now(timezone.utc) - timedelta(days=8))

        with pytest.raises(AuthError):
            usecase.verify_token(expired)

    def test_wrong_secret(self):
        usecase = create_usecase()
        user, _ = usecase.signup("user@example.com", "secret1", "홍길동")
        other = AuthUsecase(user_repo=usecase.user_repo, secret="other-secret")

        with pytest.raises(AuthError):
            usecase.verify_token(other.issue_token(user))

    def test_unknown_user(self):
        """다른 저장소에서 발급된 토큰"""
        issuer = create_usecase()
        user, token = issuer.signup("user@example.com", "secret1", "홍길동")

        with pytest.raises(AuthError):
            create_usecase().verify_token(token)
        print("✅ test_unknown_user PASSED")
