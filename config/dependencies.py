# -*- coding: utf-8 -*-
"""
Dependencies Container - 의존성 주입 컨테이너

모든 Repository, 도메인 서비스, Usecase를 중앙에서 관리.
앱 시작 시 한 번만 초기화하고, 어디서든 get_dependencies()로 접근.
"""
from dataclasses import dataclass
from typing import Optional

from domain.repositories import (
    ExchangeRateRepository,
    ExchangeRateStateRepository,
    PortfolioRepository,
    StockRepository,
    UserRepository,
)
from domain.services.exchange_rate_service import ExchangeRateService
from usecase import (
    AuthUsecase,
    ImportExportUsecase,
    MindMapUsecase,
    PortfolioUsecase,
    StockUsecase,
)


@dataclass
class Dependencies:
    """애플리케이션 의존성 컨테이너"""

    # === Internal Repositories (JSON / Memory) ===
    portfolio_repo: PortfolioRepository
    exchange_rate_state_repo: ExchangeRateStateRepository
    user_repo: UserRepository

    # === External Repositories ===
    exchange_rate_repo: ExchangeRateRepository
    stock_repo: StockRepository

    # === Services / Usecases ===
    exchange_rate_service: ExchangeRateService
    portfolio_usecase: PortfolioUsecase
    mind_map_usecase: MindMapUsecase
    stock_usecase: StockUsecase
    auth_usecase: AuthUsecase
    import_export_usecase: ImportExportUsecase


# 싱글톤 인스턴스
_dependencies: Optional[Dependencies] = None


def init_dependencies(test_mode: bool = False) -> Dependencies:
    """
    의존성 초기화 (앱 시작 시 한 번만 호출)

    Args:
        test_mode: 테스트 모드 여부 (예시 포트폴리오 사용 여부 등 로그용)

    Returns:
        Dependencies: 초기화된 의존성 컨테이너
    """
    global _dependencies

    # 이미 초기화된 경우 기존 인스턴스 반환
    if _dependencies is not None:
        return _dependencies

    # Internal Repository Implementations
    from data.persistence.json_store import (
        JsonPortfolioRepositoryImpl,
        JsonExchangeRateStateRepositoryImpl,
    )
    from data.persistence.memory import InMemoryUserRepositoryImpl

    # External Repository Implementations
    from data.external.exchange_rate import ExchangeRateRepositoryImpl
    from data.external.stock import StockRepositoryImpl

    exchange_rate_repo = ExchangeRateRepositoryImpl()
    exchange_rate_state_repo = JsonExchangeRateStateRepositoryImpl()
    exchange_rate_service = ExchangeRateService(
        provider=exchange_rate_repo,
        state_repo=exchange_rate_state_repo,
    )

    portfolio_repo = JsonPortfolioRepositoryImpl(rate_provider=exchange_rate_service.get)
    stock_repo = StockRepositoryImpl()
    user_repo = InMemoryUserRepositoryImpl()

    portfolio_usecase = PortfolioUsecase(
        portfolio_repo=portfolio_repo,
        stock_repo=stock_repo,
        exchange_rate_service=exchange_rate_service,
    )

    _dependencies = Dependencies(
        # Internal Repositories
        portfolio_repo=portfolio_repo,
        exchange_rate_state_repo=exchange_rate_state_repo,
        user_repo=user_repo,
        # External Repositories
        exchange_rate_repo=exchange_rate_repo,
        stock_repo=stock_repo,
        # Services / Usecases
        exchange_rate_service=exchange_rate_service,
        portfolio_usecase=portfolio_usecase,
        mind_map_usecase=MindMapUsecase(portfolio_usecase=portfolio_usecase),
        stock_usecase=StockUsecase(stock_repo=stock_repo),
        auth_usecase=AuthUsecase(user_repo=user_repo),
        import_export_usecase=ImportExportUsecase(portfolio_usecase=portfolio_usecase),
    )

    print(f"[DI] Dependencies initialized (test_mode={test_mode})")
    return _dependencies


def get_dependencies() -> Dependencies:
    """
    의존성 컨테이너 조회 (초기화 후 어디서든 호출 가능)

    Returns:
        Dependencies: 의존성 컨테이너

    Raises:
        RuntimeError: 초기화되지 않은 경우
    """
    if _dependencies is None:
        raise RuntimeError(
            "Dependencies not initialized. Call init_dependencies() first."
        )
    return _dependencies


def set_dependencies(dependencies: Dependencies) -> None:
    """의존성 컨테이너 직접 설정 (테스트용)"""
    global _dependencies
    _dependencies = dependencies


def reset_dependencies() -> None:
    """
    의존성 컨테이너 초기화 (테스트용)
    """
    global _dependencies
    _dependencies = None
