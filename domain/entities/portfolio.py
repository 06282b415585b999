"""Portfolio Entity - 포트폴리오 집합 엔티티"""
import uuid
from typing import Dict, Iterable, List, Optional

from domain.entities.holding import Holding
from domain.exceptions import DuplicateHoldingError, HoldingNotFoundError
from domain.services.valuation import aggregate_holdings

DEFAULT_PORTFOLIO_NAME = '나의 포트폴리오'


class Portfolio:
    """
    포트폴리오 엔티티

    보유 종목 목록을 소유하며, 합계(total_value, total_profit_loss, 원화)는
    종목이 바뀔 때마다 다시 계산되는 파생 값입니다. 직접 설정할 수 없습니다.
    """

    def __init__(
        self,
        holdings: Optional[Iterable[Holding]] = None,
        portfolio_id: Optional[str] = None,
        user_id: str = 'default-user',
        name: str = DEFAULT_PORTFOLIO_NAME,
    ):
        self.id = portfolio_id or str(uuid.uuid4())
        self.user_id = user_id
        self.name = name
        self._holdings: List[Holding] = []
        self._total_value = 0.0
        self._total_profit_loss = 0.0
        self.set_holdings(holdings or [])

    # === 파생 값 ===

    @property
    def holdings(self) -> List[Holding]:
        return list(self._holdings)

    @property
    def total_value(self) -> float:
        return self._total_value

    @property
    def total_profit_loss(self) -> float:
        return self._total_profit_loss

    @property
    def symbols(self) -> List[str]:
        return [h.symbol for h in self._holdings]

    def _recalculate(self):
        summary = aggregate_holdings(self._holdings)
        self._total_value = summary.value_krw
        self._total_profit_loss = summary.profit_loss_krw

    def _index_of(self, symbol: str) -> int:
        for i, holding in enumerate(self._holdings):
            if holding.symbol == symbol:
                return i
        return -1

    # === 조회 ===

    def get_holding(self, symbol: str) -> Optional[Holding]:
        index = self._index_of(symbol)
        return self._holdings[index] if index >= 0 else None

    def has_holding(self, symbol: str) -> bool:
        return self._index_of(symbol) >= 0

    def __len__(self):
        return len(self._holdings)

    # === 변경 ===

    def add_holding(self, holding: Holding) -> Holding:
        """
        종목 추가

        Raises:
            DuplicateHoldingError: 같은 symbol이 이미 있는 경우
        """
        if self.has_holding(holding.symbol):
            raise DuplicateHoldingError(holding.symbol)
        self._holdings.append(holding)
        self._recalculate()
        return holding

    def update_holding(self, symbol: str, **changes) -> Holding:
        """
        종목 부분 수정

        Args:
            symbol: 수정할 종목
            **changes: 바꿀 필드 (snake_case)

        Returns:
            Holding: 수정된 종목

        Raises:
            HoldingNotFoundError: 종목이 없는 경우
            DuplicateHoldingError: symbol을 이미 있는 다른 종목으로 바꾸는 경우
        """
        index = self._index_of(symbol)
        if index < 0:
            raise HoldingNotFoundError(symbol)

        updated = self._holdings[index].copy(**changes)
        if updated.symbol != symbol and self.has_holding(updated.symbol):
            raise DuplicateHoldingError(updated.symbol)

        self._holdings[index] = updated
        self._recalculate()
        return updated

    def update_price(
        self,
        symbol: str,
        current_price_krw: float,
        current_price_usd: float,
        day_change_rate: Optional[float] = None,
    ) -> Holding:
        """현재가 갱신 (시세 새로고침)"""
        changes = {
            'current_price_krw': current_price_krw,
            'current_price_usd': current_price_usd,
        }
        if day_change_rate is not None:
            changes['day_change_rate'] = day_change_rate
        return self.update_holding(symbol, **changes)

    def remove_holding(self, symbol: str) -> Holding:
        """
        종목 삭제

        Raises:
            HoldingNotFoundError: 종목이 없는 경우
        """
        index = self._index_of(symbol)
        if index < 0:
            raise HoldingNotFoundError(symbol)
        removed = self._holdings.pop(index)
        self._recalculate()
        return removed

    def set_holdings(self, holdings: Iterable[Holding]) -> None:
        """
        전체 종목 교체 (덮어쓰기 가져오기)

        Raises:
            DuplicateHoldingError: 목록 안에 같은 symbol이 있는 경우
        """
        new_holdings = list(holdings)
        seen: Dict[str, bool] = {}
        for holding in new_holdings:
            if holding.symbol in seen:
                raise DuplicateHoldingError(holding.symbol)
            seen[holding.symbol] = True
        self._holdings = new_holdings
        self._recalculate()

    def merge_holdings(self, holdings: Iterable[Holding]) -> List[Holding]:
        """
        기존 종목은 유지하고 새 symbol만 추가 (병합 가져오기)

        Returns:
            List[Holding]: 실제로 추가된 종목
        """
        added: List[Holding] = []
        for holding in holdings:
            if self.has_holding(holding.symbol):
                continue
            self._holdings.append(holding)
            added.append(holding)
        self._recalculate()
        return added

    def clear(self) -> None:
        self._holdings = []
        self._recalculate()

    # === 직렬화 ===

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'userId': self.user_id,
            'name': self.name,
            'holdings': [h.to_dict() for h in self._holdings],
            'totalValue': self._total_value,
            'totalProfitLoss': self._total_profit_loss,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Portfolio':
        """v2 형식 dict에서 생성 (합계는 다시 계산)"""
        return cls(
            holdings=[Holding.from_dict(h) for h in data.get('holdings') or []],
            portfolio_id=data.get('id'),
            user_id=data.get('userId') or 'default-user',
            name=data.get('name') or DEFAULT_PORTFOLIO_NAME,
        )

    def __repr__(self):
        return f"Portfolio(id={self.id!r}, holdings={len(self._holdings)}, total_value={self._total_value})"
