"""Flask 인증 미들웨어"""
from functools import wraps
from typing import Any, Callable, Optional

from flask import g, request

from config import item
from config.dependencies import get_dependencies
from domain.exceptions import AuthError
from presentation.web.responses import UNAUTHORIZED, error_response

BEARER_PREFIX = 'Bearer '


def get_bearer_token() -> Optional[str]:
    """Authorization: Bearer <token> 헤더에서 토큰 추출"""
    header = request.headers.get('Authorization', '')
    if not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


def require_auth(f: Callable) -> Callable:
    """
    JWT 인증 데코레이터 (API 엔드포인트용)

    - is_test=True: 테스트 모드, 인증 우회 (g.current_user = None)
    - is_test=False: 운영 모드, Bearer 토큰 검증 필수
    """
    @wraps(f)
    def decorated_function(*args: Any, **kwargs: Any) -> Any:
        if item.is_test:
            g.current_user = None
            return f(*args, **kwargs)

        token = get_bearer_token()
        if not token:
            return error_response(UNAUTHORIZED, "인증이 필요합니다.", 401)

        try:
            g.current_user = get_dependencies().auth_usecase.verify_token(token)
        except AuthError as e:
            return error_response(UNAUTHORIZED, str(e), 401)

        return f(*args, **kwargs)

    return decorated_function
