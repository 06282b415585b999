"""API 응답 형식 - {"success", "data" | "error": {"code", "message"}, "timestamp"}"""
from datetime import datetime, timezone
from typing import Any, Tuple

from flask import Response, jsonify

# 오류 코드
VALIDATION_ERROR = 'VALIDATION_ERROR'
UNAUTHORIZED = 'UNAUTHORIZED'
NOT_FOUND = 'NOT_FOUND'
DUPLICATE = 'DUPLICATE'
IMPORT_FORMAT_ERROR = 'IMPORT_FORMAT_ERROR'
SIMULATION_STOPPED = 'SIMULATION_STOPPED'
INTERNAL_ERROR = 'INTERNAL_ERROR'


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data: Any = None, status: int = 200) -> Tuple[Response, int]:
    return jsonify({
        "success": True,
        "data": data,
        "timestamp": _timestamp(),
    }), status


def error_response(code: str, message: str, status: int = 400) -> Tuple[Response, int]:
    return jsonify({
        "success": False,
        "error": {
            "code": code,
            "message": message,
        },
        "timestamp": _timestamp(),
    }), status


def internal_error_response(e: Exception) -> Tuple[Response, int]:
    return error_response(INTERNAL_ERROR, f"서버 오류가 발생했습니다: {e}", 500)
