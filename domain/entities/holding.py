"""Holding Entity - 보유 종목 엔티티"""
import re
from typing import Iterable, List, Optional

from domain.value_objects.currency import Currency, Market

DEFAULT_SECTOR = '기타'
QUANTITY_DECIMALS = 6

_KRX_SYMBOL = re.compile(r'^\d{6}$')


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """공백 제거 + 중복 제거 (입력 순서 유지)"""
    result: List[str] = []
    for tag in tags or []:
        tag = str(tag).strip()
        if tag and tag not in result:
            result.append(tag)
    return result


def is_krx_symbol(symbol: str) -> bool:
    """6자리 숫자 종목코드면 국내(KRX) 종목"""
    return bool(_KRX_SYMBOL.match(symbol or ''))


class Holding:
    """
    보유 종목 엔티티

    원화/달러 가격을 각각 독립적으로 보관합니다. 사용자가 한쪽 통화로 입력하면
    입력 시점 환율로 다른 쪽이 계산되고, 이후 실시간 환율과 어긋날 수 있습니다.
    """

    def __init__(
        self,
        symbol: str,
        name: str,
        quantity: float,
        avg_price_krw: float,
        avg_price_usd: float,
        current_price_krw: float,
        current_price_usd: float,
        sector: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        day_change_rate: Optional[float] = None,
    ):
        self.symbol = (symbol or '').strip()
        self.name = (name or '').strip()
        self.quantity = round(float(quantity), QUANTITY_DECIMALS)
        self.avg_price_krw = float(avg_price_krw)
        self.avg_price_usd = float(avg_price_usd)
        self.current_price_krw = float(current_price_krw)
        self.current_price_usd = float(current_price_usd)
        self.sector = (sector or '').strip() or DEFAULT_SECTOR
        self.tags = normalize_tags(tags)
        self.day_change_rate = None if day_change_rate is None else float(day_change_rate)

        self._validate()

    def _validate(self):
        """비즈니스 규칙 검증"""
        if not self.symbol:
            raise ValueError("symbol은 필수입니다")
        if not self.name:
            raise ValueError("name은 필수입니다")
        if self.quantity < 0:
            raise ValueError("quantity는 0 이상이어야 합니다")
        for field_name in ('avg_price_krw', 'avg_price_usd', 'current_price_krw', 'current_price_usd'):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name}는 0 이상이어야 합니다")

    @property
    def market(self) -> Market:
        """종목코드 형식으로 시장 추정 (해외는 NASDAQ으로 표기)"""
        return Market.KRX if is_krx_symbol(self.symbol) else Market.NASDAQ

    @property
    def currency(self) -> Currency:
        return self.market.currency

    def copy(self, **changes) -> 'Holding':
        """
        일부 필드만 바꾼 새 Holding 반환 (부분 병합)

        Args:
            **changes: 바꿀 필드 (snake_case)

        Returns:
            Holding: 검증을 다시 거친 새 인스턴스
        """
        fields = {
            'symbol': self.symbol,
            'name': self.name,
            'quantity': self.quantity,
            'avg_price_krw': self.avg_price_krw,
            'avg_price_usd': self.avg_price_usd,
            'current_price_krw': self.current_price_krw,
            'current_price_usd': self.current_price_usd,
            'sector': self.sector,
            'tags': list(self.tags),
            'day_change_rate': self.day_change_rate,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise ValueError(f"알 수 없는 필드: {', '.join(sorted(unknown))}")
        fields.update(changes)
        return Holding(**fields)

    def to_dict(self) -> dict:
        data = {
            'symbol': self.symbol,
            'name': self.name,
            'quantity': self.quantity,
            'avgPriceKrw': self.avg_price_krw,
            'avgPriceUsd': self.avg_price_usd,
            'currentPriceKrw': self.current_price_krw,
            'currentPriceUsd': self.current_price_usd,
            'sector': self.sector,
            'tags': list(self.tags),
        }
        if self.day_change_rate is not None:
            data['dayChangeRate'] = self.day_change_rate
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Holding':
        """
        현재(v2) 형식 dict에서 생성

        Raises:
            ValueError: 필수 필드 누락 또는 숫자 형식 오류
        """
        try:
            return cls(
                symbol=data.get('symbol'),
                name=data.get('name'),
                quantity=data.get('quantity', 0) or 0,
                avg_price_krw=data.get('avgPriceKrw', 0) or 0,
                avg_price_usd=data.get('avgPriceUsd', 0) or 0,
                current_price_krw=data.get('currentPriceKrw', 0) or 0,
                current_price_usd=data.get('currentPriceUsd', 0) or 0,
                sector=data.get('sector'),
                tags=data.get('tags') or [],
                day_change_rate=data.get('dayChangeRate'),
            )
        except (TypeError, AttributeError) as e:
            raise ValueError(f"잘못된 종목 데이터: {e}") from e

    def __eq__(self, other):
        if not isinstance(other, Holding):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Holding(symbol={self.symbol!r}, name={self.name!r}, quantity={self.quantity}, "
                f"current_price_krw={self.current_price_krw})")
