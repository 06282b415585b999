"""MindMapNode Value Object - 마인드맵 시각화 트리 노드"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from domain.value_objects.node_type import NodeType


@dataclass
class MindMapNode:
    """
    마인드맵 트리 노드

    보기 모드나 데이터가 바뀔 때마다 새로 만들어지는 파생 데이터입니다.
    id는 역할 + 키로 만들어지며 (root, sector-IT, stock-005930),
    재생성되어도 같은 노드는 같은 id를 가집니다.

    radius/color/x/y/fx/fy/vx/vy는 시각화 단계에서 채워지는 값입니다.
    """
    id: str
    name: str
    value: float
    profit_loss: float
    profit_loss_rate: float
    node_type: NodeType
    children: Optional[List['MindMapNode']] = None
    symbol: Optional[str] = None
    sector: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    day_change_rate: Optional[float] = None

    # === 시각화 필드 ===
    radius: Optional[float] = None
    color: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    fx: Optional[float] = None
    fy: Optional[float] = None
    vx: float = 0.0
    vy: float = 0.0

    def __post_init__(self):
        if self.node_type != NodeType.STOCK and self.children is None:
            self.children = []

    @property
    def is_leaf(self) -> bool:
        return self.node_type == NodeType.STOCK

    def iter_nodes(self) -> Iterator['MindMapNode']:
        """자기 자신을 포함한 전위 순회"""
        yield self
        for child in self.children or []:
            yield from child.iter_nodes()

    def find(self, node_id: str) -> Optional['MindMapNode']:
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def flatten(self) -> Tuple[List['MindMapNode'], List[Tuple[str, str]]]:
        """
        트리를 노드 목록 + (부모 id, 자식 id) 링크 목록으로 평탄화

        Returns:
            (nodes, links)

        Raises:
            ValueError: 트리 안에 같은 id가 두 번 이상 나오는 경우
        """
        nodes: List[MindMapNode] = []
        links: List[Tuple[str, str]] = []
        seen: Dict[str, MindMapNode] = {}

        def visit(node: 'MindMapNode', parent: Optional['MindMapNode']):
            if node.id in seen:
                raise ValueError(f"중복된 노드 id: {node.id}")
            seen[node.id] = node
            nodes.append(node)
            if parent is not None:
                links.append((parent.id, node.id))
            for child in node.children or []:
                visit(child, node)

        visit(self, None)
        return nodes, links

    def to_dict(self, include_children: bool = True) -> dict:
        data = {
            'id': self.id,
            'name': self.name,
            'value': self.value,
            'profitLoss': self.profit_loss,
            'profitLossRate': self.profit_loss_rate,
            'type': str(self.node_type),
        }
        if self.symbol is not None:
            data['symbol'] = self.symbol
        if self.sector is not None:
            data['sector'] = self.sector
        if self.tags:
            data['tags'] = list(self.tags)
        if self.day_change_rate is not None:
            data['dayChangeRate'] = self.day_change_rate
        if self.radius is not None:
            data['radius'] = self.radius
        if self.color is not None:
            data['color'] = self.color
        if self.x is not None:
            data['x'] = self.x
            data['y'] = self.y
        if self.fx is not None:
            data['fx'] = self.fx
            data['fy'] = self.fy
        if include_children and self.children is not None:
            data['children'] = [child.to_dict() for child in self.children]
        return data
