# -*- coding: utf-8 -*-
"""Exchange Rate Repository Interface - 환율 제공자 추상화"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.exchange_rate_state import ExchangeRateState


class ExchangeRateRepository(ABC):
    """USD/KRW 환율 제공자 인터페이스"""

    @abstractmethod
    def fetch_usd_to_krw_rate(self) -> float:
        """
        제공자에서 환율 조회 (정상 범위 검증 포함)

        Returns:
            float: USD/KRW 환율

        Raises:
            ExchangeRateUnavailableError: 모든 제공자 실패 시
        """
        ...

    @abstractmethod
    def get_usd_to_krw_rate(self) -> float:
        """
        환율 조회 (실패하지 않음)

        Returns:
            float: 조회 성공 시 새 환율, 실패 시 마지막 캐시 값, 캐시가 없으면 기본값 1300
        """
        ...


class ExchangeRateStateRepository(ABC):
    """환율 상태(환율, 갱신 시각, 수동 여부) 저장소"""

    @abstractmethod
    def load(self) -> Optional[ExchangeRateState]:
        ...

    @abstractmethod
    def save(self, state: ExchangeRateState) -> None:
        ...
