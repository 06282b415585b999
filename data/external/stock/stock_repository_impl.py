# -*- coding: utf-8 -*-
"""StockRepository 구현체 - KIS/Alpha Vantage + 로컬 목록 fallback"""
import logging
from typing import List, Optional

from data.external.alpha_vantage.alpha_vantage_service import AlphaVantageService
from data.external.kis.kis_service import KisService
from data.external.stock import stock_catalog
from domain.entities.holding import is_krx_symbol
from domain.repositories.stock_repository import StockRepository
from domain.value_objects.stock_quote import QuoteSource, StockQuote, StockSearchResult

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_SEARCH_RESULTS = 10


def _catalog_result(stock: stock_catalog.CatalogStock) -> StockSearchResult:
    return StockSearchResult(
        symbol=stock.symbol,
        name=stock.name,
        market=stock.market,
        sector=stock.sector,
        name_ko=stock.name_ko,
    )


class StockRepositoryImpl(StockRepository):
    """
    국내: KIS → 로컬 목록, 해외: Alpha Vantage(실제 키 설정 시) → 로컬 목록

    로컬 목록 시세는 기준가이며 source=LOCAL로 표시됩니다.
    """

    def __init__(
        self,
        kis_service: Optional[KisService] = None,
        alpha_vantage_service: Optional[AlphaVantageService] = None,
    ):
        self.kis_service = kis_service or KisService()
        self.alpha_vantage_service = alpha_vantage_service or AlphaVantageService()

    def _search_providers(self, query: str, market: Optional[str]) -> List[StockSearchResult]:
        results: List[StockSearchResult] = []
        if market in ('KRX', None) and self.kis_service.is_configured():
            results += self.kis_service.search_korean_stocks(query)
        if market in ('NYSE', 'NASDAQ', None) and self.alpha_vantage_service.client.is_configured():
            results += self.alpha_vantage_service.search_foreign_stocks(query)
        return results

    def search(self, query: str, market: Optional[str] = None) -> List[StockSearchResult]:
        query = (query or '').strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        candidates = self._search_providers(query, market)
        candidates += [_catalog_result(s) for s in stock_catalog.search_catalog(query, market)]

        results: List[StockSearchResult] = []
        seen = set()
        for result in candidates:
            if result.symbol in seen:
                continue
            seen.add(result.symbol)
            results.append(result)
            if len(results) >= MAX_SEARCH_RESULTS:
                break
        return results

    def _local_quote(self, symbol: str) -> Optional[StockQuote]:
        stock = stock_catalog.find_stock(symbol)
        if stock is None:
            return None
        return StockQuote(
            symbol=stock.symbol,
            name=stock.name,
            current_price=float(stock_catalog.get_base_price(stock)),
            change_rate=0.0,
            change_amount=0.0,
            volume=0,
            currency='KRW' if stock.market == 'KRX' else 'USD',
            source=QuoteSource.LOCAL,
            sector=stock.sector,
        )

    def get_price(self, symbol: str, market: Optional[str] = None) -> Optional[StockQuote]:
        symbol = (symbol or '').strip().upper()
        if not symbol:
            return None

        is_domestic = market == 'KRX' if market else is_krx_symbol(symbol)
        quote = None
        if is_domestic:
            if self.kis_service.is_configured():
                quote = self.kis_service.get_korean_stock_price(symbol)
        elif self.alpha_vantage_service.client.is_configured():
            quote = self.alpha_vantage_service.get_foreign_stock_price(symbol)

        if quote is not None:
            return quote

        local = self._local_quote(symbol)
        if local is None:
            logger.info(f"{symbol}: 시세를 찾을 수 없습니다")
        return local
