"""Valuation Value Objects - 평가금액/손익 계산 결과"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HoldingValuation:
    """단일 보유 종목 평가 결과"""
    symbol: str
    value_krw: float
    value_usd: float
    profit_loss_krw: float
    profit_loss_usd: float
    profit_loss_rate: float  # %, 원화 기준
    value_usd_at_live_rate: Optional[float] = None  # 표시용 (현재 환율 환산)

    @property
    def cost_basis_krw(self) -> float:
        return self.value_krw - self.profit_loss_krw


@dataclass(frozen=True)
class AggregateValuation:
    """종목 묶음(포트폴리오, 카테고리) 합산 평가 결과"""
    value_krw: float = 0.0
    value_usd: float = 0.0
    profit_loss_krw: float = 0.0
    profit_loss_usd: float = 0.0
    profit_loss_rate: float = 0.0
    count: int = 0
