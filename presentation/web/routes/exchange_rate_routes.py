"""
Exchange Rate Routes - USD/KRW 환율

- GET /api/exchange-rate/usd-krw - 현재 환율 상태
- POST /api/exchange-rate/refresh - 환율 갱신 ({"force": bool})
- POST /api/exchange-rate/manual - 수동 환율 설정 ({"rate": float})
- DELETE /api/exchange-rate/manual - 수동 환율 해제
"""
import logging

from flask import Blueprint, request

from config.dependencies import get_dependencies
from presentation.web.middleware.auth_middleware import require_auth
from presentation.web.responses import (
    VALIDATION_ERROR,
    error_response,
    internal_error_response,
    success_response,
)

logger = logging.getLogger(__name__)

exchange_rate_bp = Blueprint('exchange_rate', __name__, url_prefix='/api/exchange-rate')


def _state_data() -> dict:
    service = get_dependencies().exchange_rate_service
    data = service.get_state().to_dict()
    data['isFresh'] = service.is_fresh()
    return data


@exchange_rate_bp.route('/usd-krw', methods=['GET'])
def get_usd_krw():
    """현재 환율 상태 {usdToKrwRate, lastUpdated, isManualRate, isFresh}"""
    try:
        return success_response(_state_data())
    except Exception as e:
        logger.exception("환율 조회 실패")
        return internal_error_response(e)


@exchange_rate_bp.route('/refresh', methods=['POST'])
@require_auth
def refresh_rate():
    """환율 갱신 (force=True면 수동 환율/갱신 주기 무시)"""
    try:
        data = request.get_json(silent=True) or {}
        updated = get_dependencies().exchange_rate_service.refresh(force=bool(data.get('force', False)))
        result = _state_data()
        result['updated'] = updated
        return success_response(result)
    except Exception as e:
        logger.exception("환율 갱신 실패")
        return internal_error_response(e)


@exchange_rate_bp.route('/manual', methods=['POST'])
@require_auth
def set_manual_rate():
    """수동 환율 설정 (800~2000)"""
    try:
        data = request.get_json(silent=True) or {}
        rate = data.get('rate')
        if rate is None:
            return error_response(VALIDATION_ERROR, "rate 값이 필요합니다.", 400)
        get_dependencies().exchange_rate_service.set_manual(float(rate))
        return success_response(_state_data())
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("수동 환율 설정 실패")
        return internal_error_response(e)


@exchange_rate_bp.route('/manual', methods=['DELETE'])
@require_auth
def clear_manual_rate():
    """수동 환율 해제 후 즉시 갱신"""
    try:
        get_dependencies().exchange_rate_service.clear_manual(refresh=True)
        return success_response(_state_data())
    except Exception as e:
        logger.exception("수동 환율 해제 실패")
        return internal_error_response(e)
