# -*- coding: utf-8 -*-
"""한국투자증권 국내주식 검색/현재가 서비스"""
import logging
from typing import List, Optional

from data.external.kis.kis_client import KisClient
from data.external.kis.kis_models import KisPriceOutput, KisSearchItem
from domain.value_objects.currency import Market
from domain.value_objects.stock_quote import QuoteSource, StockQuote, StockSearchResult

logger = logging.getLogger(__name__)

SEARCH_END_POINT = "/uapi/domestic-stock/v1/quotations/search"
SEARCH_TR_ID = "CTPF1002R"
PRICE_END_POINT = "/uapi/domestic-stock/v1/quotations/inquire-price"
PRICE_TR_ID = "FHKST01010100"


def _to_int(value: str) -> int:
    try:
        return int(float(value or 0))
    except ValueError:
        return 0


def _to_float(value: str) -> float:
    try:
        return float(value or 0)
    except ValueError:
        return 0.0


class KisService:
    """KIS 국내주식 서비스 (미설정 시 빈 결과)"""

    def __init__(self, client: Optional[KisClient] = None):
        self.client = client or KisClient()

    def is_configured(self) -> bool:
        return self.client.is_configured()

    def search_korean_stocks(self, query: str) -> List[StockSearchResult]:
        """
        국내 종목 검색

        Returns:
            List[StockSearchResult]: 검색 결과, 실패 시 빈 리스트
        """
        data = self.client.get_request(
            end_point=SEARCH_END_POINT,
            tr_id=SEARCH_TR_ID,
            params={"user_id": "", "seq": "1", "query": query},
        )
        if not data or not isinstance(data.get('output'), list):
            return []

        results = []
        for output in data['output']:
            stock = KisSearchItem.from_output(output)
            if stock.pdno and stock.prdt_name:
                results.append(StockSearchResult(symbol=stock.pdno, name=stock.prdt_name, market=str(Market.KRX)))
        return results

    def get_korean_stock_price(self, symbol: str) -> Optional[StockQuote]:
        """
        국내 종목 현재가

        Returns:
            Optional[StockQuote]: 현재가, 실패 시 None
        """
        data = self.client.get_request(
            end_point=PRICE_END_POINT,
            tr_id=PRICE_TR_ID,
            params={"fid_cond_mrkt_div_code": "J", "fid_input_iscd": symbol},
        )
        if not data or not data.get('output'):
            return None

        price = KisPriceOutput.from_output(data['output'])
        current_price = _to_int(price.stck_prpr)
        if current_price <= 0:
            logger.warning(f"[KIS] {symbol} 현재가 없음")
            return None

        return StockQuote(
            symbol=symbol,
            name=price.prdt_name,
            current_price=float(current_price),
            change_rate=_to_float(price.prdy_ctrt),
            change_amount=float(_to_int(price.prdy_vrss)),
            volume=_to_int(price.acml_vol),
            currency='KRW',
            source=QuoteSource.KIS,
        )
