"""Config Layer (key_store) / JSON 저장소 / 통화 유틸 테스트"""
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import key_store
from data.persistence.json_store import JsonExchangeRateStateRepositoryImpl, JsonPortfolioRepositoryImpl
from domain.entities.exchange_rate_state import ExchangeRateState
from domain.entities.holding import Holding
from domain.entities.portfolio import Portfolio
from utils import currency_util


@pytest.fixture(autouse=True)
def temp_key_store(tmp_path):
    """테스트마다 임시 key_store 파일 사용 후 원래 경로로 복구"""
    original = key_store.KEY_STORE_PATH
    key_store.set_path(str(tmp_path / "key_store.json"))
    yield
    key_store.set_path(original)


class TestKeyStore:
    """key_store 읽기/쓰기 테스트"""

    def test_write_read_delete(self):
        assert key_store.read("MISSING") is None
        assert key_store.read("MISSING", 0) == 0

        key_store.write("A", {"값": 1})
        key_store.write("B", [1, 2])
        assert key_store.read("A") == {"값": 1}
        assert set(key_store.get_all_keys()) == {"A", "B"}

        key_store.delete("A")
        key_store.delete("A")
        assert key_store.get_all_keys() == ["B"]

    def test_creates_file(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        key_store.set_path(str(path))
        key_store.write("A", 1)
        assert path.exists()

    def test_broken_file(self, tmp_path):
        """깨진 JSON 파일은 빈 저장소로 취급"""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        key_store.set_path(str(path))
        assert key_store.read("A") is None


class TestJsonPortfolioRepository:
    """포트폴리오 저장소 / 스키마 변환 테스트"""

    def test_save_and_load(self):
        repo = JsonPortfolioRepositoryImpl()
        portfolio = Portfolio(holdings=[
            Holding("005930", "삼성전자", 100, 65000, 50.0, 70000, 53.85, "IT", ["대형주"]),
        ])
        repo.save(portfolio)

        record = key_store.read(key_store.PORTFOLIO)
        assert record['schemaVersion'] == 2
        assert 'totalValue' not in record['portfolio']
        assert 'totalProfitLoss' not in record['portfolio']

        loaded = repo.load()
        assert loaded.id == portfolio.id
        assert loaded.holdings == portfolio.holdings
        assert loaded.total_value == 7_000_000

    def test_empty(self):
        assert JsonPortfolioRepositoryImpl().load() is None

    def test_v1_record_migrated(self):
        """schemaVersion 없는 v1 레코드는 현재 환율로 변환 후 다시 저장"""
        key_store.write(key_store.PORTFOLIO, {
            'id': 'p-1',
            'userId': 'default-user',
            'name': '내 포트폴리오',
            'holdings': [
                {'symbol': 'AAPL', 'name': 'Apple', 'quantity': 1, 'avgPrice': 150.5,
                 'currentPrice': 180, 'currency': 'USD', 'sector': 'IT', 'tags': []},
                {'symbol': '005930', 'name': '삼성전자', 'quantity': 10, 'avgPrice': 65000,
                 'currentPrice': 70000, 'currency': 'KRW'},
            ],
            'totalValue': 12345,
        })
        repo = JsonPortfolioRepositoryImpl(rate_provider=lambda: 1350.0)
        portfolio = repo.load()

        assert portfolio.id == 'p-1'
        apple = portfolio.get_holding("AAPL")
        assert apple.avg_price_krw == 203175
        assert apple.current_price_krw == 243000
        assert portfolio.get_holding("005930").avg_price_usd == 48.15

        record = key_store.read(key_store.PORTFOLIO)
        assert record['schemaVersion'] == 2
        assert record['portfolio']['holdings'][0]['avgPriceKrw'] == 203175
        print("✅ test_v1_record_migrated PASSED")

    def test_clear(self):
        repo = JsonPortfolioRepositoryImpl()
        repo.save(Portfolio())
        repo.clear()
        assert repo.load() is None


class TestJsonExchangeRateStateRepository:
    def test_round_trip(self):
        repo = JsonExchangeRateStateRepositoryImpl()
        assert repo.load() is None

        state = ExchangeRateState(usd_to_krw_rate=1385.5, last_updated=1700000000.0, is_manual_rate=True)
        repo.save(state)
        assert repo.load() == state
        assert key_store.read(key_store.EXCHANGE_RATE_STATE)['isManualRate'] is True


class TestCurrencyUtil:
    """통화 변환/표시 테스트"""

    def test_convert(self):
        assert currency_util.convert_usd_to_krw(150.5, 1350) == 203175
        assert currency_util.convert_krw_to_usd(65000, 1300) == 50.0
        assert currency_util.convert_to_krw(100, 'USD', 1300) == 130000
        assert currency_util.convert_to_krw(100, 'KRW', 1300) == 100
        assert currency_util.convert_from_krw(130000, 'USD', 1300) == 100

    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            currency_util.convert_usd_to_krw(1, 0)

    def test_format(self):
        assert currency_util.format_currency(1234567, 'KRW') == '1,234,567원'
        assert currency_util.format_currency(1234.5, 'USD') == '$1,234.50'
        assert currency_util.format_currency(1000, 'KRW', show_symbol=False) == '1,000'
