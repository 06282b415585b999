"""노드 반지름/색상 테스트"""
import sys
import os

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from domain.entities.holding import Holding
from domain.services.node_style import (
    BASE_RADIUS,
    MAX_RADIUS,
    MIN_RADIUS,
    NEUTRAL_COLOR,
    annotate_tree,
    calculate_node_radius,
    get_color_by_profit_loss,
)
from domain.services.portfolio_transform import transform_holdings_to_mind_map


class TestNodeRadius:
    """반지름 계산 테스트"""

    def test_zero_total(self):
        """전체 평가금액 0이면 최소 반지름"""
        assert calculate_node_radius(1000, 0) == MIN_RADIUS == 15

    def test_full_share(self):
        """비중 100%면 기본 반지름"""
        assert calculate_node_radius(5_000_000, 5_000_000) == BASE_RADIUS == 30

    def test_area_proportional(self):
        """반지름은 비중의 제곱근에 비례"""
        assert calculate_node_radius(25, 100) == 15.0
        assert calculate_node_radius(49, 100) == pytest.approx(21.0)

    def test_clamped(self):
        """[15, 80] 범위 제한"""
        assert calculate_node_radius(1, 1_000_000) == MIN_RADIUS
        assert calculate_node_radius(100, 1) == MAX_RADIUS
        assert calculate_node_radius(0, 100) == MIN_RADIUS


class TestNodeColor:
    """수익률 색상 테스트"""

    def test_neutral(self):
        """0, None, NaN은 회색"""
        assert get_color_by_profit_loss(0) == NEUTRAL_COLOR == '#9CA3AF'
        assert get_color_by_profit_loss(None) == NEUTRAL_COLOR
        assert get_color_by_profit_loss(float('nan')) == NEUTRAL_COLOR

    def test_saturates_at_50(self):
        """|수익률| 50% 이상은 같은 색"""
        assert get_color_by_profit_loss(100) == get_color_by_profit_loss(50)
        assert get_color_by_profit_loss(50) == 'rgb(13, 46, 33)'
        assert get_color_by_profit_loss(-80) == get_color_by_profit_loss(-50) == 'rgb(220, 30, 30)'

    def test_interpolation_rounds_half_up(self):
        """중간값은 선형 보간 후 반올림 (.5는 올림)"""
        # 25% → intensity 0.5: (34+13)/2=23.5, (197+46)/2=121.5, (94+33)/2=63.5
        assert get_color_by_profit_loss(25) == 'rgb(24, 122, 64)'

    def test_direction(self):
        """양수는 초록, 음수는 빨강 계열"""
        gain = get_color_by_profit_loss(1)
        loss = get_color_by_profit_loss(-1)
        assert gain.startswith('rgb(') and loss.startswith('rgb(')
        assert gain != loss


class TestAnnotateTree:
    """트리 시각화 속성 채우기 테스트"""

    def test_all_nodes_annotated(self):
        holdings = [
            Holding("005930", "삼성전자", 100, 65000, 50.0, 70000, 53.85, "IT"),
            Holding("005380", "현대차", 10, 180000, 138.46, 180000, 138.46, "자동차"),
        ]
        root = annotate_tree(transform_holdings_to_mind_map(holdings))

        for node in root.iter_nodes():
            assert MIN_RADIUS <= node.radius <= MAX_RADIUS
            assert node.color is not None

        assert root.radius == BASE_RADIUS
        assert root.find("stock-005380").color == NEUTRAL_COLOR
        print("✅ test_all_nodes_annotated PASSED")
