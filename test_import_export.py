"""ImportExportUsecase 테스트"""
import sys
import os
import json
from datetime import date
from unittest.mock import Mock

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from domain.entities.holding import Holding
from domain.entities.portfolio import Portfolio
from domain.exceptions import ImportFormatError
from domain.repositories.portfolio_repository import PortfolioRepository
from domain.services.exchange_rate_service import ExchangeRateService
from usecase.import_export_usecase import ImportExportUsecase, export_filename
from usecase.portfolio_usecase import PortfolioUsecase

CSV_V2 = (
    "﻿종목코드,종목명,보유수량,평균매수가(원),평균매수가(달러),현재가(원),현재가(달러),섹터,태그\n"
    "000660,SK하이닉스,50,120000,92.31,135000,103.85,IT,반도체\n"
    "005930,삼성전자,1,1,1,1,1,IT,"
)


def create_usecase(rate=1300.0):
    repo = Mock(spec=PortfolioRepository)
    repo.load.return_value = Portfolio(holdings=[
        Holding("005930", "삼성전자", 100, 65000, 50.0, 70000, 53.85, "IT", ["대형주"]),
    ])
    rate_service = Mock(spec=ExchangeRateService)
    rate_service.get.return_value = rate
    portfolio_usecase = PortfolioUsecase(portfolio_repo=repo, exchange_rate_service=rate_service, use_sample=False)
    return ImportExportUsecase(portfolio_usecase), portfolio_usecase


class TestExport:
    def test_filename(self):
        assert export_filename("csv", date(2024, 3, 1)) == "portfolio_2024-03-01.csv"

    def test_export_csv(self):
        usecase, _ = create_usecase()
        export = usecase.export_file("csv", today=date(2024, 3, 1))

        assert export.filename == "portfolio_2024-03-01.csv"
        assert export.content_type.startswith("text/csv")
        assert "005930,삼성전자,100" in export.content

    def test_export_json(self):
        usecase, _ = create_usecase()
        export = usecase.export_file("JSON")
        payload = json.loads(export.content)

        assert export.filename.endswith(".json")
        assert payload['holdings'][0]['symbol'] == "005930"

    def test_unknown_format(self):
        usecase, _ = create_usecase()
        with pytest.raises(ValueError):
            usecase.export_file("xlsx")


class TestImport:
    def test_overwrite(self):
        """덮어쓰기: 기존 종목 전부 교체"""
        usecase, portfolio_usecase = create_usecase()
        result = usecase.import_file(CSV_V2, "csv", "overwrite")

        assert result.imported == 2
        assert result.added == 2
        assert portfolio_usecase.get_portfolio().get_holding("005930").quantity == 1

    def test_merge(self):
        """병합: 기존 종목은 유지하고 새 종목만 추가"""
        usecase, portfolio_usecase = create_usecase()
        result = usecase.import_file(CSV_V2, "csv", "merge")

        assert result.imported == 2
        assert result.added == 1
        portfolio = portfolio_usecase.get_portfolio()
        assert portfolio.get_holding("005930").quantity == 100
        assert portfolio.symbols == ["005930", "000660"]
        print("✅ test_merge PASSED")

    def test_json_v1_uses_current_rate(self):
        usecase, portfolio_usecase = create_usecase(rate=1400.0)
        content = json.dumps({'holdings': [
            {'symbol': 'AAPL', 'name': 'Apple', 'quantity': 1, 'avgPrice': 100, 'currentPrice': 110, 'currency': 'USD'},
        ]})
        usecase.import_file(content, "json")

        assert portfolio_usecase.get_portfolio().get_holding("AAPL").avg_price_krw == 140000

    def test_json_errors_reported(self):
        """가격 없는 JSON 레코드는 제외되고 결과 errors로 보고"""
        usecase, portfolio_usecase = create_usecase()
        content = json.dumps({'holdings': [
            {'symbol': 'AAPL', 'name': 'Apple', 'quantity': 1, 'avgPrice': 100, 'currentPrice': 110, 'currency': 'USD'},
            {'symbol': 'MSFT', 'name': 'Microsoft', 'quantity': 1},
        ]})
        result = usecase.import_file(content, "json", "merge")

        assert result.added == 1
        assert len(result.errors) == 1
        assert portfolio_usecase.get_portfolio().get_holding("MSFT") is None

    def test_errors_reported(self):
        usecase, _ = create_usecase()
        content = CSV_V2 + "\n035420,NAVER,abc,1,1,1,1,IT,"
        result = usecase.import_file(content, "csv")
        assert len(result.errors) == 1
        assert result.to_dict()['errors'] == result.errors

    def test_nothing_to_import(self):
        usecase, portfolio_usecase = create_usecase()
        content = "종목코드,종목명,보유수량,평균매수가,현재가\n,,,,"
        with pytest.raises(ImportFormatError):
            usecase.import_file(content + "\n,이름만,1,1,1", "csv")
        assert len(portfolio_usecase.get_portfolio()) == 1

    def test_invalid_mode_and_format(self):
        usecase, _ = create_usecase()
        with pytest.raises(ValueError):
            usecase.import_file(CSV_V2, "csv", "append")
        with pytest.raises(ValueError):
            usecase.import_file(CSV_V2, "xml")
