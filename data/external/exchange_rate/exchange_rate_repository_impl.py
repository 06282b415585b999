# -*- coding: utf-8 -*-
"""ExchangeRateRepository 구현체 - 다중 제공자 fallback + 1시간 캐시"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from config.item import DEFAULT_USD_TO_KRW_RATE, EXCHANGE_RATE_CACHE_SECONDS
from data.external.exchange_rate.exchange_rate_client import ExchangeRateClient
from domain.exceptions import ExchangeRateUnavailableError
from domain.repositories.exchange_rate_repository import ExchangeRateRepository
from domain.services.exchange_rate_service import is_sane_rate

logger = logging.getLogger(__name__)


@dataclass
class CacheInfo:
    """캐시 정보"""
    rate: float
    cached_at: float
    source: str

    def is_valid(self, now: float, max_age_seconds: float) -> bool:
        return (now - self.cached_at) < max_age_seconds


class ExchangeRateRepositoryImpl(ExchangeRateRepository):
    """
    exchangerate-api → 네이버 금융 → yfinance 순서로 조회

    각 제공자 값은 800~2000 범위 검증을 통과해야 채택됩니다.
    """

    def __init__(
        self,
        client: Optional[ExchangeRateClient] = None,
        clock: Callable[[], float] = time.time,
        cache_seconds: float = EXCHANGE_RATE_CACHE_SECONDS,
    ):
        self.client = client or ExchangeRateClient()
        self.clock = clock
        self.cache_seconds = cache_seconds
        self._cache: Optional[CacheInfo] = None

    def _providers(self) -> List[Tuple[str, Callable[[], Optional[float]]]]:
        return [
            ('exchangerate-api', self.client.fetch_from_exchangerate_api),
            ('naver', self.client.fetch_from_naver),
            ('yfinance', self.client.fetch_from_yfinance),
        ]

    @property
    def cache_info(self) -> Optional[CacheInfo]:
        return self._cache

    def clear_cache(self) -> None:
        self._cache = None

    def fetch_usd_to_krw_rate(self) -> float:
        now = self.clock()
        if self._cache and self._cache.is_valid(now, self.cache_seconds):
            return self._cache.rate

        for name, fetch in self._providers():
            rate = fetch()
            if rate is None:
                continue
            if not is_sane_rate(rate):
                logger.warning(f"[{name}] 환율 범위 벗어남, 무시: {rate}")
                continue
            self._cache = CacheInfo(rate=rate, cached_at=now, source=name)
            logger.info(f"[{name}] USD/KRW 환율 조회 성공: {rate}")
            return rate

        raise ExchangeRateUnavailableError("모든 환율 제공자에서 조회 실패")

    def get_usd_to_krw_rate(self) -> float:
        try:
            return self.fetch_usd_to_krw_rate()
        except ExchangeRateUnavailableError as e:
            if self._cache:
                logger.warning(f"{e} - 캐시 환율 사용: {self._cache.rate}")
                return self._cache.rate
            logger.warning(f"{e} - 기본 환율 사용: {DEFAULT_USD_TO_KRW_RATE}")
            return DEFAULT_USD_TO_KRW_RATE
