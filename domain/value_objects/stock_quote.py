"""Stock Quote / Search Result Value Objects"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional


class QuoteSource(Enum):
    """시세 출처"""
    KIS = 'KIS'
    ALPHA_VANTAGE = 'ALPHA_VANTAGE'
    LOCAL = 'LOCAL'  # 로컬 기준가 (실시세 아님)

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class StockSearchResult:
    """종목 검색 결과"""
    symbol: str
    name: str
    market: str
    sector: Optional[str] = None
    name_ko: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'symbol': self.symbol,
            'name': self.name,
            'market': self.market,
        }
        if self.sector:
            data['sector'] = self.sector
        if self.name_ko:
            data['nameKo'] = self.name_ko
        return data


@dataclass(frozen=True)
class StockQuote:
    """현재가 조회 결과"""
    symbol: str
    current_price: float
    change_rate: float
    change_amount: float
    volume: int
    currency: str
    source: QuoteSource
    name: str = ''
    sector: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        return {
            'symbol': data['symbol'],
            'name': data['name'],
            'currentPrice': data['current_price'],
            'changeRate': data['change_rate'],
            'changeAmount': data['change_amount'],
            'volume': data['volume'],
            'currency': data['currency'],
            'source': str(self.source),
            'sector': data['sector'],
        }
