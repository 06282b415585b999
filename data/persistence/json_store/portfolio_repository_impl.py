"""Portfolio Repository Implementation (key_store JSON)"""
import logging
from typing import Callable, Optional

from config import key_store
from config.item import DEFAULT_USD_TO_KRW_RATE
from data.serialization.holding_migration import CURRENT_SCHEMA_VERSION, load_holdings
from domain.entities.portfolio import DEFAULT_PORTFOLIO_NAME, Portfolio
from domain.repositories.portfolio_repository import PortfolioRepository

logger = logging.getLogger(__name__)

SCHEMA_VERSION_KEY = 'schemaVersion'


class JsonPortfolioRepositoryImpl(PortfolioRepository):
    """
    key_store 기반 Portfolio Repository 구현체

    저장 형식: {"schemaVersion": 2, "portfolio": {id, userId, name, holdings}}
    schemaVersion이 없는 레코드는 v1(포트폴리오 dict를 그대로 저장한 형식)로 보고 변환합니다.
    """

    def __init__(self, rate_provider: Optional[Callable[[], float]] = None):
        """
        Args:
            rate_provider: v1 → v2 변환 시 사용할 현재 환율 조회 함수
        """
        self.rate_provider = rate_provider or (lambda: DEFAULT_USD_TO_KRW_RATE)

    def load(self) -> Optional[Portfolio]:
        record = key_store.read(key_store.PORTFOLIO)
        if not isinstance(record, dict):
            return None

        if SCHEMA_VERSION_KEY in record:
            version = int(record.get(SCHEMA_VERSION_KEY) or 1)
            data = record.get('portfolio') or {}
        else:
            version = 1
            data = record

        try:
            holdings = load_holdings(data.get('holdings') or [], version, self.rate_provider())
        except ValueError as e:
            logger.error(f"저장된 포트폴리오를 읽을 수 없습니다: {e}")
            return None

        portfolio = Portfolio(
            holdings=holdings,
            portfolio_id=data.get('id'),
            user_id=data.get('userId') or 'default-user',
            name=data.get('name') or DEFAULT_PORTFOLIO_NAME,
        )

        if version < CURRENT_SCHEMA_VERSION:
            logger.info(f"포트폴리오 스키마 v{version} → v{CURRENT_SCHEMA_VERSION} 변환 ({len(holdings)}개 종목)")
            self.save(portfolio)
        return portfolio

    def save(self, portfolio: Portfolio) -> None:
        data = portfolio.to_dict()
        # 합계는 파생 값이므로 저장하지 않음
        data.pop('totalValue', None)
        data.pop('totalProfitLoss', None)
        key_store.write(key_store.PORTFOLIO, {
            SCHEMA_VERSION_KEY: CURRENT_SCHEMA_VERSION,
            'portfolio': data,
        })

    def clear(self) -> None:
        key_store.delete(key_store.PORTFOLIO)
