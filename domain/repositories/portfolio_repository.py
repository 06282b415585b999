# -*- coding: utf-8 -*-
"""Portfolio Repository Interface"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.portfolio import Portfolio


class PortfolioRepository(ABC):
    """포트폴리오 저장소 인터페이스 (스키마 버전 태그 기반 마이그레이션 포함)"""

    @abstractmethod
    def load(self) -> Optional[Portfolio]:
        """
        저장된 포트폴리오 조회

        Returns:
            Portfolio: 저장된 포트폴리오 (구버전이면 현재 형식으로 변환), 없으면 None
        """
        ...

    @abstractmethod
    def save(self, portfolio: Portfolio) -> None:
        """현재 스키마 버전으로 저장"""
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
