"""ExchangeRateState Entity - 환율 상태"""
from dataclasses import dataclass, replace
from typing import Optional

from config.item import DEFAULT_USD_TO_KRW_RATE


@dataclass(frozen=True)
class ExchangeRateState:
    """
    환율 상태 (불변)

    상태는 삭제되지 않고 통째로 교체됩니다.
    is_manual_rate가 True이면 강제 갱신이 아닌 자동 갱신은 환율을 덮어쓰지 않습니다.
    """
    usd_to_krw_rate: float = DEFAULT_USD_TO_KRW_RATE
    last_updated: Optional[float] = None  # epoch seconds
    is_manual_rate: bool = False

    def with_rate(self, rate: float, updated_at: float, manual: bool) -> 'ExchangeRateState':
        return replace(self, usd_to_krw_rate=float(rate), last_updated=updated_at, is_manual_rate=manual)

    def to_dict(self) -> dict:
        return {
            'usdToKrwRate': self.usd_to_krw_rate,
            'lastUpdated': self.last_updated,
            'isManualRate': self.is_manual_rate,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'ExchangeRateState':
        if not data:
            return cls()
        return cls(
            usd_to_krw_rate=float(data.get('usdToKrwRate') or DEFAULT_USD_TO_KRW_RATE),
            last_updated=data.get('lastUpdated'),
            is_manual_rate=bool(data.get('isManualRate', False)),
        )
