"""NodeDetail / Tooltip Value Objects - 노드 선택/호버 결과"""
from dataclasses import dataclass, field
from typing import List, Optional

TOOLTIP_OFFSET_X = 10
TOOLTIP_OFFSET_Y = -10


@dataclass(frozen=True)
class NodeDetail:
    """노드 상세 정보 (클릭 시 상세 패널용)"""
    id: str
    name: str
    node_type: str
    value: float
    profit_loss: float
    profit_loss_rate: float
    color: Optional[str] = None
    symbol: Optional[str] = None
    sector: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    day_change_rate: Optional[float] = None
    children: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.node_type,
            'value': self.value,
            'profitLoss': self.profit_loss,
            'profitLossRate': self.profit_loss_rate,
            'color': self.color,
            'symbol': self.symbol,
            'sector': self.sector,
            'tags': list(self.tags),
            'dayChangeRate': self.day_change_rate,
            'children': list(self.children),
        }


@dataclass(frozen=True)
class Tooltip:
    """호버 툴팁 (커서 위치 기준)"""
    node_id: str
    name: str
    node_type: str
    value: float
    profit_loss: float
    profit_loss_rate: float
    x: float
    y: float

    def to_dict(self) -> dict:
        return {
            'nodeId': self.node_id,
            'name': self.name,
            'type': self.node_type,
            'value': self.value,
            'profitLoss': self.profit_loss,
            'profitLossRate': self.profit_loss_rate,
            'x': self.x,
            'y': self.y,
        }
