# -*- coding: utf-8 -*-
"""Alpha Vantage 해외 주식 검색/현재가 서비스"""
import logging
from typing import List, Optional

from data.external.alpha_vantage.alpha_vantage_client import AlphaVantageClient
from domain.value_objects.currency import Market
from domain.value_objects.stock_quote import QuoteSource, StockQuote, StockSearchResult

logger = logging.getLogger(__name__)

US_REGION = 'United States'


class AlphaVantageService:
    """해외 주식 서비스 (오류 시 빈 결과)"""

    def __init__(self, client: Optional[AlphaVantageClient] = None):
        self.client = client or AlphaVantageClient()

    def search_foreign_stocks(self, query: str) -> List[StockSearchResult]:
        """
        SYMBOL_SEARCH

        Returns:
            List[StockSearchResult]: 미국 종목은 market=NASDAQ, 그 외는 region 그대로
        """
        data = self.client.query("SYMBOL_SEARCH", {"keywords": query})
        if not data or not isinstance(data.get('bestMatches'), list):
            return []

        results = []
        for match in data['bestMatches']:
            symbol = match.get('1. symbol')
            name = match.get('2. name')
            if not symbol or not name:
                continue
            region = match.get('4. region', '')
            market = str(Market.NASDAQ) if region == US_REGION else region
            results.append(StockSearchResult(symbol=symbol, name=name, market=market))
        return results

    def get_foreign_stock_price(self, symbol: str) -> Optional[StockQuote]:
        """
        GLOBAL_QUOTE

        Returns:
            Optional[StockQuote]: 현재가 (USD), 실패 시 None
        """
        data = self.client.query("GLOBAL_QUOTE", {"symbol": symbol})
        quote = (data or {}).get('Global Quote') or {}
        if not quote.get('05. price'):
            return None

        try:
            return StockQuote(
                symbol=quote.get('01. symbol') or symbol,
                current_price=float(quote['05. price']),
                change_amount=float(quote.get('09. change') or 0),
                change_rate=float(str(quote.get('10. change percent') or '0').replace('%', '')),
                volume=int(float(quote.get('06. volume') or 0)),
                currency='USD',
                source=QuoteSource.ALPHA_VANTAGE,
            )
        except ValueError as e:
            logger.error(f"Alpha Vantage {symbol} 시세 파싱 실패: {e}")
            return None
