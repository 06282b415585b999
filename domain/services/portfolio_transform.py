"""
Portfolio → MindMapNode 트리 변환

보기 모드별 그룹화 규칙:
- sector: 섹터별 분할 (종목은 정확히 한 카테고리에 속함)
- profitLoss: 수익률 구간별 분할 (빈 구간은 생략)
- theme: 태그별 그룹 (태그가 N개인 종목은 N개 카테고리에 모두 나타남)
"""
import math
from collections import OrderedDict
from typing import Callable, Dict, List, Tuple, TYPE_CHECKING

from domain.entities.holding import DEFAULT_SECTOR, Holding
from domain.services.valuation import aggregate, value_holding
from domain.value_objects.mind_map_node import MindMapNode
from domain.value_objects.node_type import NodeType
from domain.value_objects.valuation import HoldingValuation
from domain.value_objects.view_mode import ViewMode

if TYPE_CHECKING:
    from domain.entities.portfolio import Portfolio

ROOT_ID = 'root'
ROOT_NAME = '나의 포트폴리오'
UNTAGGED_CATEGORY = DEFAULT_SECTOR

# (이름, 하한 포함, 상한 미포함) - 위에서부터 순서대로 표시
PROFIT_LOSS_BUCKETS: List[Tuple[str, float, float]] = [
    ('+20% 이상', 20.0, math.inf),
    ('+10% ~ +20%', 10.0, 20.0),
    ('0% ~ +10%', 0.0, 10.0),
    ('-10% ~ 0%', -10.0, 0.0),
    ('-10% 미만', -math.inf, -10.0),
]

# 부동소수점 오차로 경계값(예: 10.0)이 9.999999...가 되는 것을 막기 위한 반올림 자릿수
_RATE_PRECISION = 10

_Member = Tuple[Holding, HoldingValuation]


def get_profit_loss_bucket(rate: float) -> str:
    """
    수익률이 속하는 구간 이름 (하한 포함, 상한 미포함)

    Args:
        rate: 수익률(%)

    Returns:
        str: 구간 이름
    """
    rate = round(rate, _RATE_PRECISION)
    for name, lower, upper in PROFIT_LOSS_BUCKETS:
        if lower <= rate < upper:
            return name
    # NaN 등 어떤 구간에도 속하지 않는 값
    return PROFIT_LOSS_BUCKETS[-1][0]


def _stock_node(holding: Holding, valuation: HoldingValuation, node_id: str) -> MindMapNode:
    return MindMapNode(
        id=node_id,
        name=holding.name,
        value=valuation.value_krw,
        profit_loss=valuation.profit_loss_krw,
        profit_loss_rate=valuation.profit_loss_rate,
        node_type=NodeType.STOCK,
        children=None,
        symbol=holding.symbol,
        sector=holding.sector,
        tags=list(holding.tags),
        day_change_rate=holding.day_change_rate,
    )


def _category_node(
    category_id: str,
    name: str,
    members: List[_Member],
    leaf_id: Callable[[Holding], str],
) -> MindMapNode:
    summary = aggregate(v for _, v in members)
    return MindMapNode(
        id=category_id,
        name=name,
        value=summary.value_krw,
        profit_loss=summary.profit_loss_krw,
        profit_loss_rate=summary.profit_loss_rate,
        node_type=NodeType.CATEGORY,
        children=[_stock_node(h, v, leaf_id(h)) for h, v in members],
    )


def _group_by_sector(members: List[_Member]) -> List[MindMapNode]:
    groups: Dict[str, List[_Member]] = OrderedDict()
    for holding, valuation in members:
        groups.setdefault(holding.sector or DEFAULT_SECTOR, []).append((holding, valuation))

    return [
        _category_node(f'sector-{sector}', sector, group, lambda h: f'stock-{h.symbol}')
        for sector, group in groups.items()
    ]


def _group_by_profit_loss(members: List[_Member]) -> List[MindMapNode]:
    groups: Dict[str, List[_Member]] = {name: [] for name, _, _ in PROFIT_LOSS_BUCKETS}
    for holding, valuation in members:
        groups[get_profit_loss_bucket(valuation.profit_loss_rate)].append((holding, valuation))

    return [
        _category_node(f'category-{name}', name, groups[name], lambda h: f'stock-{h.symbol}')
        for name, _, _ in PROFIT_LOSS_BUCKETS
        if groups[name]
    ]


def _group_by_theme(members: List[_Member]) -> List[MindMapNode]:
    groups: Dict[str, List[_Member]] = OrderedDict()
    for holding, valuation in members:
        for tag in holding.tags or [UNTAGGED_CATEGORY]:
            groups.setdefault(tag, []).append((holding, valuation))

    nodes = []
    for tag, group in groups.items():
        category_id = f'theme-{tag}'
        # 같은 종목이 여러 태그 아래 나타나므로 leaf id에 카테고리 id를 붙임
        nodes.append(_category_node(category_id, tag, group, lambda h, cid=category_id: f'{cid}/stock-{h.symbol}'))
    return nodes


_GROUPERS = {
    ViewMode.SECTOR: _group_by_sector,
    ViewMode.PROFIT_LOSS: _group_by_profit_loss,
    ViewMode.THEME: _group_by_theme,
}


def transform_holdings_to_mind_map(
    holdings: List[Holding],
    view_mode=ViewMode.SECTOR,
    root_name: str = ROOT_NAME,
) -> MindMapNode:
    """
    보유 종목 목록을 마인드맵 트리로 변환

    Args:
        holdings: 보유 종목
        view_mode: ViewMode 또는 'sector' | 'profitLoss' | 'theme' | 'tag'
        root_name: 루트 노드 이름

    Returns:
        MindMapNode: 루트 노드 (종목이 없으면 값 0, 자식 없음)
    """
    mode = ViewMode.parse(view_mode)
    members: List[_Member] = [(h, value_holding(h)) for h in holdings]
    summary = aggregate(v for _, v in members)

    return MindMapNode(
        id=ROOT_ID,
        name=root_name,
        value=summary.value_krw,
        profit_loss=summary.profit_loss_krw,
        profit_loss_rate=summary.profit_loss_rate,
        node_type=NodeType.ROOT,
        children=_GROUPERS[mode](members) if members else [],
    )


def transform_portfolio_to_mind_map(portfolio: 'Portfolio', view_mode=ViewMode.SECTOR) -> MindMapNode:
    return transform_holdings_to_mind_map(portfolio.holdings, view_mode)

