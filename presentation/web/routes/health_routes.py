"""Health Routes - 서버 상태 확인"""
from flask import Blueprint

from config import item
from config.dependencies import get_dependencies
from presentation.web.responses import success_response

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    deps = get_dependencies()
    return success_response({
        "status": "ok",
        "testMode": item.is_test,
        "usdToKrwRate": deps.exchange_rate_service.get(),
    })
