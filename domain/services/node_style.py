"""Node Sizing & Coloring - 노드 반지름/색상 계산"""
import math
from typing import Optional

from domain.value_objects.mind_map_node import MindMapNode

BASE_RADIUS = 30
MIN_RADIUS = 15
MAX_RADIUS = 80

NEUTRAL_COLOR = '#9CA3AF'
# 수익률이 0에 가까울 때 → 50% 이상일 때
PROFIT_START = (34, 197, 94)    # #22C55E
PROFIT_END = (13, 46, 33)
LOSS_START = (239, 68, 68)      # #EF4444
LOSS_END = (220, 30, 30)
FULL_INTENSITY_RATE = 50.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_node_radius(value: float, total_value: float) -> float:
    """
    평가금액 비중에 따른 노드 반지름 (면적 비례)

    Args:
        value: 노드 평가금액
        total_value: 전체 평가금액

    Returns:
        float: BASE * sqrt(value / total) 를 [MIN, MAX]로 제한한 값, 전체가 0이면 MIN
    """
    if total_value <= 0 or value <= 0:
        return float(MIN_RADIUS)
    radius = BASE_RADIUS * math.sqrt(value / total_value)
    return float(max(MIN_RADIUS, min(MAX_RADIUS, radius)))


def get_color_by_profit_loss(rate: Optional[float]) -> str:
    """
    수익률에 따른 노드 색상

    0 또는 None이면 회색, 양수는 초록, 음수는 빨강 계열이며
    |수익률| 50% 이상에서 가장 진한 색이 됩니다.

    Returns:
        str: 'rgb(r, g, b)' 또는 '#9CA3AF'
    """
    if rate is None or rate == 0 or math.isnan(rate):
        return NEUTRAL_COLOR

    intensity = min(abs(rate) / FULL_INTENSITY_RATE, 1.0)
    start, end = (PROFIT_START, PROFIT_END) if rate > 0 else (LOSS_START, LOSS_END)
    r, g, b = (_round_half_up(s + (e - s) * intensity) for s, e in zip(start, end))
    return f'rgb({r}, {g}, {b})'


def annotate_tree(root: MindMapNode) -> MindMapNode:
    """트리의 모든 노드에 radius, color 설정 (루트 평가금액 기준)"""
    total_value = root.value
    for node in root.iter_nodes():
        node.radius = calculate_node_radius(node.value, total_value)
        node.color = get_color_by_profit_loss(node.profit_loss_rate)
    return root
