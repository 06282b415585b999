"""
Portfolio Routes - 보유 종목 관리

- GET /api/portfolio - 포트폴리오 요약 (종목별 평가 + 합계)
- POST /api/portfolio - 종목 추가
- PATCH /api/portfolio/<symbol> - 종목 수정
- DELETE /api/portfolio/<symbol> - 종목 삭제
- POST /api/portfolio/refresh-prices - 현재가 새로고침
- GET /api/portfolio/export?format=csv|json - 내보내기 (파일 다운로드)
- POST /api/portfolio/import - 가져오기 (multipart file 또는 JSON {"content", "format", "mode"})
"""
import logging

from flask import Blueprint, Response, request

from config.dependencies import get_dependencies
from domain.exceptions import DuplicateHoldingError, HoldingNotFoundError, ImportFormatError
from presentation.web.middleware.auth_middleware import require_auth
from presentation.web.responses import (
    DUPLICATE,
    IMPORT_FORMAT_ERROR,
    NOT_FOUND,
    VALIDATION_ERROR,
    error_response,
    internal_error_response,
    success_response,
)

logger = logging.getLogger(__name__)

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='/api/portfolio')

# 요청 JSON(camelCase) → Usecase 인자(snake_case)
_CREATE_FIELDS = {
    'symbol': 'symbol',
    'name': 'name',
    'quantity': 'quantity',
    'avgPriceKrw': 'avg_price_krw',
    'avgPriceUsd': 'avg_price_usd',
    'currentPriceKrw': 'current_price_krw',
    'currentPriceUsd': 'current_price_usd',
    'avgPrice': 'avg_price',
    'currentPrice': 'current_price',
    'currency': 'currency',
    'sector': 'sector',
    'tags': 'tags',
}
_UPDATE_FIELDS = {
    'symbol': 'symbol',
    'name': 'name',
    'quantity': 'quantity',
    'avgPriceKrw': 'avg_price_krw',
    'avgPriceUsd': 'avg_price_usd',
    'currentPriceKrw': 'current_price_krw',
    'currentPriceUsd': 'current_price_usd',
    'sector': 'sector',
    'tags': 'tags',
    'dayChangeRate': 'day_change_rate',
}


def _map_fields(data: dict, mapping: dict) -> dict:
    return {mapping[key]: value for key, value in data.items() if key in mapping}


@portfolio_bp.route('', methods=['GET'])
@require_auth
def get_portfolio():
    try:
        return success_response(get_dependencies().portfolio_usecase.get_summary())
    except Exception as e:
        logger.exception("포트폴리오 조회 실패")
        return internal_error_response(e)


@portfolio_bp.route('', methods=['POST'])
@require_auth
def add_holding():
    """
    종목 추가

    Request Body (JSON):
        {
            "symbol": "005930", "name": "삼성전자", "quantity": 10,
            "avgPriceKrw", "avgPriceUsd", "currentPriceKrw", "currentPriceUsd"
            또는 "avgPrice", "currentPrice", "currency": "KRW" | "USD",
            "sector": "IT", "tags": ["반도체"]
        }
    """
    try:
        data = request.get_json(silent=True) or {}
        holding = get_dependencies().portfolio_usecase.add_holding(**_map_fields(data, _CREATE_FIELDS))
        return success_response(holding.to_dict(), 201)
    except DuplicateHoldingError as e:
        return error_response(DUPLICATE, str(e), 409)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("종목 추가 실패")
        return internal_error_response(e)


@portfolio_bp.route('/<symbol>', methods=['PATCH'])
@require_auth
def update_holding(symbol: str):
    """종목 부분 수정 (보낸 필드만 변경)"""
    try:
        data = request.get_json(silent=True) or {}
        changes = _map_fields(data, _UPDATE_FIELDS)
        if not changes:
            return error_response(VALIDATION_ERROR, "수정할 필드가 없습니다.", 400)
        holding = get_dependencies().portfolio_usecase.update_holding(symbol, **changes)
        return success_response(holding.to_dict())
    except HoldingNotFoundError as e:
        return error_response(NOT_FOUND, str(e), 404)
    except DuplicateHoldingError as e:
        return error_response(DUPLICATE, str(e), 409)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception(f"종목 수정 실패: {symbol}")
        return internal_error_response(e)


@portfolio_bp.route('/<symbol>', methods=['DELETE'])
@require_auth
def remove_holding(symbol: str):
    try:
        removed = get_dependencies().portfolio_usecase.remove_holding(symbol)
        return success_response(removed.to_dict())
    except HoldingNotFoundError as e:
        return error_response(NOT_FOUND, str(e), 404)
    except Exception as e:
        logger.exception(f"종목 삭제 실패: {symbol}")
        return internal_error_response(e)


@portfolio_bp.route('/refresh-prices', methods=['POST'])
@require_auth
def refresh_prices():
    """현재가 새로고침 - {"result": {updated, failed, skipped}, "portfolio": 요약}"""
    try:
        usecase = get_dependencies().portfolio_usecase
        result = usecase.refresh_prices()
        return success_response({
            "result": result.to_dict(),
            "portfolio": usecase.get_summary(),
        })
    except Exception as e:
        logger.exception("현재가 새로고침 실패")
        return internal_error_response(e)


@portfolio_bp.route('/export', methods=['GET'])
@require_auth
def export_portfolio():
    """포트폴리오 내보내기 (파일 다운로드)"""
    try:
        export = get_dependencies().import_export_usecase.export_file(request.args.get('format', 'csv'))
        return Response(
            export.content,
            content_type=export.content_type,
            headers={'Content-Disposition': f'attachment; filename="{export.filename}"'},
        )
    except ValueError as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("포트폴리오 내보내기 실패")
        return internal_error_response(e)


@portfolio_bp.route('/import', methods=['POST'])
@require_auth
def import_portfolio():
    """
    포트폴리오 가져오기

    multipart/form-data: file (확장자로 형식 판단), mode
    application/json: {"content": str, "format": "csv" | "json", "mode": "overwrite" | "merge"}
    """
    try:
        upload = request.files.get('file')
        if upload is not None:
            content = upload.read().decode('utf-8-sig')
            filename = (upload.filename or '').lower()
            fmt = request.form.get('format') or ('json' if filename.endswith('.json') else 'csv')
            mode = request.form.get('mode', 'overwrite')
        else:
            data = request.get_json(silent=True) or {}
            content = data.get('content')
            fmt = data.get('format', 'csv')
            mode = data.get('mode', 'overwrite')

        if not content:
            return error_response(VALIDATION_ERROR, "가져올 파일 내용이 없습니다.", 400)

        deps = get_dependencies()
        result = deps.import_export_usecase.import_file(content, fmt, mode)
        return success_response({
            "result": result.to_dict(),
            "portfolio": deps.portfolio_usecase.get_summary(),
        })
    except ImportFormatError as e:
        return error_response(IMPORT_FORMAT_ERROR, str(e), 400)
    except UnicodeDecodeError:
        return error_response(IMPORT_FORMAT_ERROR, "UTF-8 형식의 파일만 가져올 수 있습니다.", 400)
    except ValueError as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("포트폴리오 가져오기 실패")
        return internal_error_response(e)
