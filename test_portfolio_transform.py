"""Portfolio → 마인드맵 트리 변환 테스트"""
import sys
import os

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from domain.entities.holding import Holding
from domain.entities.portfolio import Portfolio
from domain.services.portfolio_transform import (
    PROFIT_LOSS_BUCKETS,
    ROOT_ID,
    get_profit_loss_bucket,
    transform_holdings_to_mind_map,
    transform_portfolio_to_mind_map,
)
from domain.value_objects.node_type import NodeType
from domain.value_objects.view_mode import ViewMode


def create_holding(symbol, name, quantity, avg_krw, cur_krw, sector="IT", tags=None):
    """테스트용 Holding 생성 (달러 가격은 1300원 기준)"""
    return Holding(
        symbol=symbol,
        name=name,
        quantity=quantity,
        avg_price_krw=avg_krw,
        avg_price_usd=round(avg_krw / 1300, 2),
        current_price_krw=cur_krw,
        current_price_usd=round(cur_krw / 1300, 2),
        sector=sector,
        tags=tags,
    )


def create_mixed_holdings():
    return [
        create_holding("005930", "삼성전자", 100, 65000, 70000, "IT", ["대형주", "배당주"]),
        create_holding("005380", "현대차", 80, 180000, 170000, "자동차", ["자동차"]),
        create_holding("051910", "LG화학", 40, 450000, 480000, "화학"),
        create_holding("000660", "SK하이닉스", 50, 100000, 125000, "IT", ["대형주"]),
    ]


class TestSectorView:
    """섹터별 보기 테스트"""

    def test_same_sector_scenario(self):
        """같은 섹터 두 종목 → 카테고리 하나, 손익 상쇄"""
        holdings = [
            create_holding("000001", "A", 100, 65000, 70000),
            create_holding("000002", "B", 50, 120000, 110000),
        ]
        root = transform_holdings_to_mind_map(holdings, ViewMode.SECTOR)

        assert root.id == ROOT_ID
        assert root.node_type == NodeType.ROOT
        assert len(root.children) == 1

        category = root.children[0]
        assert category.id == "sector-IT"
        assert category.name == "IT"
        assert category.value == 12_500_000
        assert category.profit_loss == 0
        assert category.profit_loss_rate == 0.0
        assert [c.id for c in category.children] == ["stock-000001", "stock-000002"]
        print("✅ test_same_sector_scenario PASSED")

    def test_partition(self):
        """각 종목은 정확히 한 카테고리, 카테고리 합 == 루트"""
        holdings = create_mixed_holdings()
        root = transform_holdings_to_mind_map(holdings, "sector")

        leaf_symbols = [leaf.symbol for c in root.children for leaf in c.children]
        assert sorted(leaf_symbols) == sorted(h.symbol for h in holdings)
        assert sum(c.value for c in root.children) == pytest.approx(root.value)
        assert [c.name for c in root.children] == ["IT", "자동차", "화학"]

    def test_leaf_fields(self):
        """leaf에는 종목 정보가 채워짐"""
        root = transform_holdings_to_mind_map(create_mixed_holdings())
        leaf = root.find("stock-005930")

        assert leaf.is_leaf
        assert leaf.children is None
        assert leaf.symbol == "005930"
        assert leaf.sector == "IT"
        assert leaf.tags == ["대형주", "배당주"]
        assert leaf.value == 7_000_000

    def test_empty_portfolio(self):
        """종목이 없으면 값 0인 루트만"""
        root = transform_portfolio_to_mind_map(Portfolio())
        assert root.value == 0
        assert root.children == []


class TestProfitLossView:
    """수익률 구간별 보기 테스트"""

    def test_five_buckets_in_order(self):
        """구간은 5개, 높은 수익률부터"""
        assert [name for name, _, _ in PROFIT_LOSS_BUCKETS] == [
            "+20% 이상", "+10% ~ +20%", "0% ~ +10%", "-10% ~ 0%", "-10% 미만",
        ]

    def test_bucket_boundaries(self):
        """하한 포함, 상한 미포함"""
        assert get_profit_loss_bucket(20.0) == "+20% 이상"
        assert get_profit_loss_bucket(19.99) == "+10% ~ +20%"
        assert get_profit_loss_bucket(10.0) == "+10% ~ +20%"
        assert get_profit_loss_bucket(9.99) == "0% ~ +10%"
        assert get_profit_loss_bucket(0.0) == "0% ~ +10%"
        assert get_profit_loss_bucket(-0.01) == "-10% ~ 0%"
        assert get_profit_loss_bucket(-10.0) == "-10% ~ 0%"
        assert get_profit_loss_bucket(-10.01) == "-10% 미만"

    def test_exact_boundary_from_prices(self):
        """가격으로 계산한 +10%, +20%도 경계 위 구간에 속함"""
        holdings = [
            create_holding("000010", "정확히10", 1, 50000, 55000),
            create_holding("000020", "정확히20", 1, 50000, 60000),
        ]
        root = transform_holdings_to_mind_map(holdings, ViewMode.PROFIT_LOSS)
        by_id = {c.id: c for c in root.children}

        assert [leaf.symbol for leaf in by_id["category-+10% ~ +20%"].children] == ["000010"]
        assert [leaf.symbol for leaf in by_id["category-+20% 이상"].children] == ["000020"]

    def test_empty_buckets_omitted(self):
        """빈 구간은 생략, 구간 순서 유지"""
        root = transform_holdings_to_mind_map(create_mixed_holdings(), ViewMode.PROFIT_LOSS)
        names = [c.name for c in root.children]

        # 삼성전자 +7.7%, 현대차 -5.6%, LG화학 +6.7%, SK하이닉스 +25%
        assert names == ["+20% 이상", "0% ~ +10%", "-10% ~ 0%"]
        assert sum(c.value for c in root.children) == pytest.approx(root.value)


class TestThemeView:
    """테마(태그)별 보기 테스트"""

    def test_multi_tag_fan_out(self):
        """태그 N개인 종목은 N개 카테고리에 모두 나타남"""
        holdings = [create_holding("005930", "삼성전자", 10, 65000, 70000, tags=["A", "B"])]
        root = transform_holdings_to_mind_map(holdings, ViewMode.THEME)

        assert [c.id for c in root.children] == ["theme-A", "theme-B"]
        assert root.children[0].children[0].id == "theme-A/stock-005930"
        assert root.children[1].children[0].id == "theme-B/stock-005930"
        # 카테고리 합은 루트보다 클 수 있음
        assert sum(c.value for c in root.children) == 2 * root.value

    def test_untagged_goes_to_etc(self):
        """태그 없는 종목은 '기타'"""
        root = transform_holdings_to_mind_map(create_mixed_holdings(), "theme")
        etc = root.find("theme-기타")

        assert etc is not None
        assert [leaf.symbol for leaf in etc.children] == ["051910"]

    def test_tag_alias_and_unique_ids(self):
        """'tag'는 theme 별칭, 평탄화 시 id 중복 없음"""
        root = transform_holdings_to_mind_map(create_mixed_holdings(), "tag")
        nodes, links = root.flatten()

        assert root.find("theme-대형주") is not None
        assert len({n.id for n in nodes}) == len(nodes)
        assert len(links) == len(nodes) - 1

    def test_unknown_view_mode_falls_back_to_sector(self):
        assert ViewMode.parse("unknown") == ViewMode.SECTOR
        assert ViewMode.parse("profitLoss") == ViewMode.PROFIT_LOSS
