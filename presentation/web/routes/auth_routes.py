"""
Auth Routes - 회원가입, 로그인, 토큰 검증

- POST /api/auth/signup - 회원가입
- POST /api/auth/login - 로그인
- GET /api/auth/verify - 토큰 검증 (Authorization: Bearer <token>)
"""
import logging

from flask import Blueprint, request

from config.dependencies import get_dependencies
from domain.exceptions import AuthError
from presentation.web.middleware.auth_middleware import get_bearer_token
from presentation.web.responses import (
    DUPLICATE,
    UNAUTHORIZED,
    VALIDATION_ERROR,
    error_response,
    internal_error_response,
    success_response,
)

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """
    회원가입

    Request Body (JSON):
        {"email": str, "password": str, "name": str}
    """
    try:
        data = request.get_json(silent=True) or {}
        user, token = get_dependencies().auth_usecase.signup(
            email=data.get('email'),
            password=data.get('password'),
            name=data.get('name'),
        )
        return success_response({"user": user.to_dict(), "token": token}, 201)
    except ValueError as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except AuthError as e:
        return error_response(DUPLICATE, str(e), 409)
    except Exception as e:
        logger.exception("회원가입 처리 실패")
        return internal_error_response(e)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    로그인

    Request Body (JSON):
        {"email": str, "password": str}
    """
    try:
        data = request.get_json(silent=True) or {}
        user, token = get_dependencies().auth_usecase.login(
            email=data.get('email'),
            password=data.get('password'),
        )
        return success_response({"user": user.to_dict(), "token": token})
    except AuthError as e:
        return error_response(UNAUTHORIZED, str(e), 401)
    except Exception as e:
        logger.exception("로그인 처리 실패")
        return internal_error_response(e)


@auth_bp.route('/verify', methods=['GET'])
def verify():
    """토큰 검증 - 토큰 주인 정보 반환"""
    try:
        user = get_dependencies().auth_usecase.verify_token(get_bearer_token())
        return success_response({"user": user.to_dict()})
    except AuthError as e:
        return error_response(UNAUTHORIZED, str(e), 401)
    except Exception as e:
        logger.exception("토큰 검증 실패")
        return internal_error_response(e)
