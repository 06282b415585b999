# -*- coding: utf-8 -*-
"""Stock Repository Interface - 종목 검색/시세 제공자 추상화"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from domain.value_objects.stock_quote import StockQuote, StockSearchResult


class StockRepository(ABC):
    """
    종목 검색/현재가 조회 인터페이스

    외부 API 실패는 예외가 아닌 빈 결과(None, [])로 전달됩니다.
    """

    @abstractmethod
    def search(self, query: str, market: Optional[str] = None) -> List[StockSearchResult]:
        """
        종목 검색

        Args:
            query: 검색어 (2자 미만이면 빈 결과)
            market: 'KRX' | 'NYSE' | 'NASDAQ' | None(전체)

        Returns:
            List[StockSearchResult]: 최대 10개
        """
        ...

    @abstractmethod
    def get_price(self, symbol: str, market: Optional[str] = None) -> Optional[StockQuote]:
        """
        현재가 조회

        Returns:
            StockQuote: 조회 결과, 알 수 없는 종목이면 None
        """
        ...

    def get_batch_prices(self, symbols: List[str]) -> Dict[str, Optional[StockQuote]]:
        """여러 종목 현재가 조회 (종목별 실패는 None)"""
        return {symbol: self.get_price(symbol) for symbol in symbols}
