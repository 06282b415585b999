"""
Valuation Engine - 보유 종목 평가금액/손익 계산

모든 함수는 입력만으로 결과가 정해지는 순수 함수입니다.
수익률은 원화 기준으로만 계산합니다 (원화/달러 가격이 환율 차이로 어긋나도
수익률은 하나로 유지).
"""
from typing import Iterable, Optional, TYPE_CHECKING

from domain.value_objects.valuation import AggregateValuation, HoldingValuation

if TYPE_CHECKING:
    from domain.entities.holding import Holding
    from domain.entities.portfolio import Portfolio


def calculate_profit_loss_rate(current_price: float, avg_price: float) -> float:
    """
    평균 매수가 대비 수익률(%)

    Args:
        current_price: 현재가
        avg_price: 평균 매수가

    Returns:
        float: 수익률, 평균 매수가가 0 이하이면 0
    """
    if avg_price <= 0:
        return 0.0
    return (current_price - avg_price) / avg_price * 100


def calculate_aggregate_rate(value: float, profit_loss: float) -> float:
    """
    합산 평가금액과 합산 손익으로 수익률 재계산

    원금(value - profit_loss) 대비 손익이며, 원금이 0 이하이면 0입니다.
    개별 수익률의 가중평균이 아닙니다.
    """
    cost_basis = value - profit_loss
    if cost_basis <= 0:
        return 0.0
    return profit_loss / cost_basis * 100


def value_holding(holding: 'Holding', usd_to_krw_rate: Optional[float] = None) -> HoldingValuation:
    """
    단일 종목 평가

    Args:
        holding: 보유 종목
        usd_to_krw_rate: 현재 환율 (전달 시 원화 평가금액의 달러 환산값도 계산)

    Returns:
        HoldingValuation
    """
    quantity = holding.quantity
    value_krw = holding.current_price_krw * quantity
    value_usd = holding.current_price_usd * quantity

    live_usd = None
    if usd_to_krw_rate and usd_to_krw_rate > 0:
        live_usd = value_krw / usd_to_krw_rate

    return HoldingValuation(
        symbol=holding.symbol,
        value_krw=value_krw,
        value_usd=value_usd,
        profit_loss_krw=(holding.current_price_krw - holding.avg_price_krw) * quantity,
        profit_loss_usd=(holding.current_price_usd - holding.avg_price_usd) * quantity,
        profit_loss_rate=calculate_profit_loss_rate(holding.current_price_krw, holding.avg_price_krw),
        value_usd_at_live_rate=live_usd,
    )


def aggregate(valuations: Iterable[HoldingValuation]) -> AggregateValuation:
    """종목 평가 결과 합산 (원화 평가금액/손익 합계 + 원금 기준 수익률)"""
    value_krw = value_usd = pl_krw = pl_usd = 0.0
    count = 0
    for v in valuations:
        value_krw += v.value_krw
        value_usd += v.value_usd
        pl_krw += v.profit_loss_krw
        pl_usd += v.profit_loss_usd
        count += 1

    return AggregateValuation(
        value_krw=value_krw,
        value_usd=value_usd,
        profit_loss_krw=pl_krw,
        profit_loss_usd=pl_usd,
        profit_loss_rate=calculate_aggregate_rate(value_krw, pl_krw),
        count=count,
    )


def aggregate_holdings(holdings: Iterable['Holding'], usd_to_krw_rate: Optional[float] = None) -> AggregateValuation:
    return aggregate(value_holding(h, usd_to_krw_rate) for h in holdings)


def value_portfolio(portfolio: 'Portfolio', usd_to_krw_rate: Optional[float] = None) -> AggregateValuation:
    return aggregate_holdings(portfolio.holdings, usd_to_krw_rate)
