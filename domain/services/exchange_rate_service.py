"""ExchangeRateService - 환율 상태 관리 (30분 주기 갱신 + 수동 환율)"""
import logging
import threading
import time
from typing import Callable, Optional

from config.item import (
    EXCHANGE_RATE_UPDATE_MINUTES,
    MAX_SANE_RATE,
    MIN_SANE_RATE,
)
from domain.entities.exchange_rate_state import ExchangeRateState
from domain.exceptions import ExchangeRateUnavailableError
from domain.repositories.exchange_rate_repository import (
    ExchangeRateRepository,
    ExchangeRateStateRepository,
)

logger = logging.getLogger(__name__)


def is_sane_rate(rate) -> bool:
    """USD/KRW 환율이 정상 범위(800~2000)인지"""
    try:
        rate = float(rate)
    except (TypeError, ValueError):
        return False
    return MIN_SANE_RATE <= rate <= MAX_SANE_RATE


class ExchangeRateService:
    """
    환율 상태 {rate, last_updated, is_manual_rate} 소유자

    - 자동 갱신은 수동 환율 사용 중이거나 마지막 갱신 후 30분이 지나지 않았으면 건너뜀 (force 시 무시)
    - 갱신 실패 시 이전 상태 유지 (수동 여부 포함)
    - 동시에 들어온 갱신 요청은 하나만 실행
    """

    def __init__(
        self,
        provider: ExchangeRateRepository,
        clock: Callable[[], float] = time.time,
        state_repo: Optional[ExchangeRateStateRepository] = None,
        update_interval_minutes: int = EXCHANGE_RATE_UPDATE_MINUTES,
    ):
        self.provider = provider
        self.clock = clock
        self.state_repo = state_repo
        self.update_interval_seconds = update_interval_minutes * 60
        self._refresh_lock = threading.Lock()

        loaded = state_repo.load() if state_repo else None
        self._state = loaded or ExchangeRateState()

    # === 조회 ===

    def get(self) -> float:
        """현재 USD/KRW 환율"""
        return self._state.usd_to_krw_rate

    def get_state(self) -> ExchangeRateState:
        return self._state

    @property
    def is_manual_rate(self) -> bool:
        return self._state.is_manual_rate

    def is_fresh(self) -> bool:
        last_updated = self._state.last_updated
        if last_updated is None:
            return False
        return (self.clock() - last_updated) < self.update_interval_seconds

    # === 변경 ===

    def _replace_state(self, state: ExchangeRateState):
        self._state = state
        if self.state_repo:
            self.state_repo.save(state)

    def refresh(self, force: bool = False) -> bool:
        """
        제공자에서 환율 갱신

        Args:
            force: True면 수동 환율/갱신 주기를 무시하고 갱신

        Returns:
            bool: 환율이 갱신되었으면 True (건너뜀/실패/중복 요청은 False)
        """
        if not force:
            if self._state.is_manual_rate:
                logger.debug("수동 환율 사용 중 - 자동 갱신 건너뜀")
                return False
            if self.is_fresh():
                return False

        # 이미 진행 중인 갱신이 있으면 중복 실행하지 않음
        if not self._refresh_lock.acquire(blocking=False):
            logger.debug("환율 갱신이 이미 진행 중입니다")
            return False

        try:
            rate = self.provider.fetch_usd_to_krw_rate()
            if not is_sane_rate(rate):
                raise ExchangeRateUnavailableError(f"비정상 환율 값: {rate}")
        except ExchangeRateUnavailableError as e:
            logger.warning(f"환율 갱신 실패, 이전 값 유지 ({self.get()}): {e}")
            return False
        finally:
            self._refresh_lock.release()

        self._replace_state(self._state.with_rate(rate, self.clock(), manual=False))
        logger.info(f"환율 갱신: {rate}")
        return True

    def set_manual(self, rate: float) -> ExchangeRateState:
        """
        수동 환율 설정 (자동 갱신 중지)

        Raises:
            ValueError: 정상 범위(800~2000) 밖의 값
        """
        if not is_sane_rate(rate):
            raise ValueError(f"환율은 {MIN_SANE_RATE:.0f}~{MAX_SANE_RATE:.0f} 사이여야 합니다: {rate}")
        self._replace_state(self._state.with_rate(float(rate), self.clock(), manual=True))
        logger.info(f"수동 환율 설정: {rate}")
        return self._state

    def clear_manual(self, refresh: bool = True) -> ExchangeRateState:
        """수동 환율 해제 후 (선택) 즉시 강제 갱신"""
        if self._state.is_manual_rate:
            self._replace_state(ExchangeRateState(
                usd_to_krw_rate=self._state.usd_to_krw_rate,
                last_updated=self._state.last_updated,
                is_manual_rate=False,
            ))
        if refresh:
            self.refresh(force=True)
        return self._state
