"""Stock Usecase - 종목 검색 및 현재가 조회"""
import re
from typing import Dict, List, Optional

from config.item import MAX_BATCH_SYMBOLS
from domain.repositories.stock_repository import StockRepository
from domain.value_objects.currency import Market
from domain.value_objects.stock_quote import StockQuote, StockSearchResult

# 국내 6자리 종목코드 또는 영문 티커 (BRK.B 형식 허용)
_SYMBOL_PATTERN = re.compile(r'^(\d{6}|[A-Za-z][A-Za-z.\-]{0,9})$')
_MARKETS = {m.value for m in Market}


def is_valid_symbol(symbol: str) -> bool:
    return bool(_SYMBOL_PATTERN.match((symbol or '').strip()))


class StockUsecase:
    """종목 조회 Usecase"""

    def __init__(self, stock_repo: StockRepository):
        self.stock_repo = stock_repo

    @staticmethod
    def _parse_market(market: Optional[str]) -> Optional[str]:
        if not market:
            return None
        market = market.strip().upper()
        if market not in _MARKETS:
            raise ValueError(f"지원하지 않는 시장입니다: {market}")
        return market

    def search(self, query: str, market: Optional[str] = None) -> List[StockSearchResult]:
        """
        종목 검색

        Raises:
            ValueError: 알 수 없는 시장
        """
        return self.stock_repo.search((query or '').strip(), self._parse_market(market))

    def get_price(self, symbol: str, market: Optional[str] = None) -> Optional[StockQuote]:
        """
        현재가 조회

        Raises:
            ValueError: 종목코드 형식 오류, 알 수 없는 시장
        """
        if not is_valid_symbol(symbol):
            raise ValueError(f"올바르지 않은 종목코드입니다: {symbol}")
        return self.stock_repo.get_price(symbol.strip().upper(), self._parse_market(market))

    def get_batch_prices(self, symbols: List[str]) -> Dict[str, Optional[StockQuote]]:
        """
        여러 종목 현재가 조회 (최대 20개, 중복 제거)

        Raises:
            ValueError: 빈 목록, 개수 초과, 종목코드 형식 오류
        """
        if not isinstance(symbols, list) or not symbols:
            raise ValueError("symbols 목록이 필요합니다")

        normalized: List[str] = []
        for symbol in symbols:
            if not isinstance(symbol, str) or not is_valid_symbol(symbol):
                raise ValueError(f"올바르지 않은 종목코드입니다: {symbol}")
            symbol = symbol.strip().upper()
            if symbol not in normalized:
                normalized.append(symbol)

        if len(normalized) > MAX_BATCH_SYMBOLS:
            raise ValueError(f"한 번에 최대 {MAX_BATCH_SYMBOLS}개 종목까지 조회할 수 있습니다")
        return self.stock_repo.get_batch_prices(normalized)
