"""보유 종목 스키마 마이그레이션(v1 → v2) 테스트"""
import sys
import os

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from data.serialization.holding_migration import (
    CURRENT_SCHEMA_VERSION,
    MIGRATIONS,
    load_holdings,
    migrate_holding_records,
    normalize_holding_record,
)


def create_v1_record(symbol="005930", name="삼성전자", quantity=10, avg=65000, cur=70000,
                     currency="KRW", sector="IT", tags=None):
    return {
        'symbol': symbol,
        'name': name,
        'quantity': quantity,
        'avgPrice': avg,
        'currentPrice': cur,
        'currency': currency,
        'sector': sector,
        'tags': tags or [],
    }


class TestMigrateV1ToV2:
    """v1 → v2 변환 테스트"""

    def test_chain_registered(self):
        assert CURRENT_SCHEMA_VERSION == 2
        assert sorted(MIGRATIONS) == [1]

    def test_usd_record(self):
        """달러 입력: 원화 = 반올림(가격 * 환율), 달러는 센트 반올림"""
        record = create_v1_record(symbol="AAPL", name="Apple", avg=150.5, cur=180, currency="USD")
        migrated = migrate_holding_records([record], 1, 1350)[0]

        assert migrated['avgPriceKrw'] == 203175
        assert migrated['avgPriceUsd'] == 150.5
        assert migrated['currentPriceKrw'] == 243000
        assert migrated['currentPriceUsd'] == 180
        assert 'avgPrice' not in migrated
        assert 'currency' not in migrated
        assert migrated['tags'] == []

    def test_krw_record_rounds_half_up(self):
        """원화 .5는 올림 (은행가 반올림 아님)"""
        record = create_v1_record(avg=65000.5, cur=70000)
        migrated = migrate_holding_records([record], 1, 1300)[0]

        assert migrated['avgPriceKrw'] == 65001
        assert migrated['avgPriceUsd'] == 50.0
        assert migrated['currentPriceUsd'] == 53.85

    def test_default_rate(self):
        """환율이 없으면 1300"""
        record = create_v1_record(symbol="AAPL", name="Apple", avg=1, cur=2, currency="usd")
        migrated = migrate_holding_records([record], 1, None)[0]
        assert migrated['avgPriceKrw'] == 1300
        assert migrated['currentPriceKrw'] == 2600

    def test_dual_currency_record_kept(self):
        """v1 체인에 들어와도 이중 통화 필드를 모두 가진 레코드는 값 유지"""
        record = {'symbol': 'AAPL', 'name': 'Apple', 'quantity': 1,
                  'avgPriceKrw': 195000, 'avgPriceUsd': 150, 'currentPriceKrw': 234000, 'currentPriceUsd': 180}
        migrated = migrate_holding_records([record], 1, 1400)[0]
        assert migrated == record

    def test_missing_prices_reported(self):
        errors = []
        record = create_v1_record()
        del record['avgPrice']
        assert migrate_holding_records([record], 1, 1300, errors) == []
        assert errors == ["1번째 종목(005930): 가격 필드가 없습니다: avgPrice"]

    def test_current_version_unchanged(self):
        records = [{'symbol': '005930', 'avgPriceKrw': 1}]
        assert migrate_holding_records(records, 2) is records

    def test_unknown_version(self):
        with pytest.raises(ValueError):
            migrate_holding_records([], 3)
        with pytest.raises(ValueError):
            migrate_holding_records([], 0)


class TestLoadHoldings:
    """마이그레이션 + 정규화 테스트"""

    def test_non_numeric_becomes_zero(self):
        holding = normalize_holding_record({
            'symbol': '005930', 'name': '삼성전자', 'quantity': 'abc',
            'avgPriceKrw': None, 'avgPriceUsd': 'NaN', 'currentPriceKrw': '70000', 'currentPriceUsd': 53.85,
        })
        assert holding.quantity == 0
        assert holding.avg_price_krw == 0
        assert holding.avg_price_usd == 0
        assert holding.current_price_krw == 70000

    def test_invalid_records_dropped(self):
        """symbol/name 누락, 음수, 중복은 제외"""
        records = [
            create_v1_record(),
            create_v1_record(name=""),
            create_v1_record(symbol="000660", name="SK하이닉스", quantity=-1),
            create_v1_record(quantity=1),
            "not a record",
        ]
        holdings = load_holdings(records, 1, 1300)

        assert len(holdings) == 1
        assert holdings[0].symbol == "005930"
        assert holdings[0].quantity == 10
        print("✅ test_invalid_records_dropped PASSED")
