"""
Stock Routes - 종목 검색 및 현재가 조회

- GET /api/stocks/search?q=&market= - 종목 검색
- GET /api/stocks/price/<symbol>?market= - 현재가 조회
- POST /api/stocks/batch-price - 여러 종목 현재가 조회 (최대 20개)
"""
import logging

from flask import Blueprint, request

from config.dependencies import get_dependencies
from presentation.web.responses import (
    NOT_FOUND,
    VALIDATION_ERROR,
    error_response,
    internal_error_response,
    success_response,
)

logger = logging.getLogger(__name__)

stock_bp = Blueprint('stock', __name__, url_prefix='/api/stocks')


@stock_bp.route('/search', methods=['GET'])
def search_stocks():
    """종목 검색 (검색어 2자 미만이면 빈 목록)"""
    try:
        results = get_dependencies().stock_usecase.search(
            request.args.get('q', ''),
            request.args.get('market'),
        )
        return success_response([r.to_dict() for r in results])
    except ValueError as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("종목 검색 실패")
        return internal_error_response(e)


@stock_bp.route('/price/<symbol>', methods=['GET'])
def get_stock_price(symbol: str):
    """현재가 조회"""
    try:
        quote = get_dependencies().stock_usecase.get_price(symbol, request.args.get('market'))
        if quote is None:
            return error_response(NOT_FOUND, f"종목을 찾을 수 없습니다: {symbol}", 404)
        return success_response(quote.to_dict())
    except ValueError as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception(f"현재가 조회 실패: {symbol}")
        return internal_error_response(e)


@stock_bp.route('/batch-price', methods=['POST'])
def get_batch_prices():
    """
    여러 종목 현재가 조회

    Request Body (JSON):
        {"symbols": ["005930", "AAPL", ...]}
    """
    try:
        data = request.get_json(silent=True) or {}
        quotes = get_dependencies().stock_usecase.get_batch_prices(data.get('symbols'))
        return success_response({
            symbol: quote.to_dict() if quote else None
            for symbol, quote in quotes.items()
        })
    except ValueError as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("일괄 현재가 조회 실패")
        return internal_error_response(e)
