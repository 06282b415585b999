"""ExchangeRateService 테스트 (갱신 주기, 수동 환율, 실패 시 유지)"""
import sys
import os
from unittest.mock import Mock

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from domain.entities.exchange_rate_state import ExchangeRateState
from domain.exceptions import ExchangeRateUnavailableError
from domain.repositories.exchange_rate_repository import (
    ExchangeRateRepository,
    ExchangeRateStateRepository,
)
from domain.services.exchange_rate_service import ExchangeRateService, is_sane_rate


class FakeClock:
    """수동으로 시간을 옮기는 시계"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float):
        self.now += minutes * 60


def create_provider(*rates):
    """순서대로 환율을 돌려주는 제공자 Mock (예외 인스턴스는 raise)"""
    provider = Mock(spec=ExchangeRateRepository)
    provider.fetch_usd_to_krw_rate.side_effect = list(rates)
    return provider


def create_service(provider, clock=None, state_repo=None):
    return ExchangeRateService(provider=provider, clock=clock or FakeClock(), state_repo=state_repo)


class TestSaneRate:
    def test_band(self):
        assert is_sane_rate(800)
        assert is_sane_rate(2000)
        assert is_sane_rate("1350.5")
        assert not is_sane_rate(799.99)
        assert not is_sane_rate(2000.01)
        assert not is_sane_rate(None)
        assert not is_sane_rate("abc")


class TestRefresh:
    """자동/강제 갱신 테스트"""

    def test_default_rate(self):
        """상태가 없으면 기본 환율 1300"""
        service = create_service(create_provider())
        assert service.get() == 1300.0
        assert not service.is_fresh()

    def test_refresh_updates_state(self):
        clock = FakeClock()
        service = create_service(create_provider(1350.5), clock)

        assert service.refresh() is True
        state = service.get_state()
        assert state.usd_to_krw_rate == 1350.5
        assert state.last_updated == clock.now
        assert state.is_manual_rate is False

    def test_skip_when_fresh(self):
        """30분 이내에는 갱신하지 않음"""
        clock = FakeClock()
        provider = create_provider(1350.0, 1360.0)
        service = create_service(provider, clock)
        service.refresh()

        clock.advance(29)
        assert service.refresh() is False
        assert provider.fetch_usd_to_krw_rate.call_count == 1

        clock.advance(2)
        assert service.refresh() is True
        assert service.get() == 1360.0

    def test_force_ignores_freshness(self):
        provider = create_provider(1350.0, 1360.0)
        service = create_service(provider)
        service.refresh()

        assert service.refresh(force=True) is True
        assert service.get() == 1360.0

    def test_failure_keeps_previous_state(self):
        """갱신 실패 시 이전 상태 유지"""
        clock = FakeClock()
        provider = create_provider(1350.0, ExchangeRateUnavailableError("down"))
        service = create_service(provider, clock)
        service.refresh()
        before = service.get_state()

        assert service.refresh(force=True) is False
        assert service.get_state() == before

    def test_insane_rate_rejected(self):
        """범위 밖의 값은 실패로 처리"""
        service = create_service(create_provider(5000.0))
        assert service.refresh() is False
        assert service.get() == 1300.0

    def test_concurrent_refresh_skipped(self):
        """진행 중인 갱신이 있으면 중복 실행하지 않음"""
        provider = create_provider(1350.0)
        service = create_service(provider)

        service._refresh_lock.acquire()
        try:
            assert service.refresh(force=True) is False
        finally:
            service._refresh_lock.release()
        provider.fetch_usd_to_krw_rate.assert_not_called()


class TestManualRate:
    """수동 환율 테스트"""

    def test_manual_blocks_auto_refresh(self):
        """수동 환율 사용 중에는 자동 갱신 건너뜀"""
        clock = FakeClock()
        provider = create_provider(1350.0)
        service = create_service(provider, clock)
        service.set_manual(1400)

        clock.advance(60)
        assert service.refresh() is False
        assert service.get() == 1400.0
        assert service.is_manual_rate
        provider.fetch_usd_to_krw_rate.assert_not_called()

    def test_force_replaces_manual(self):
        service = create_service(create_provider(1350.0))
        service.set_manual(1400)

        assert service.refresh(force=True) is True
        assert service.get() == 1350.0
        assert not service.is_manual_rate

    def test_failed_force_keeps_manual_flag(self):
        """강제 갱신이 실패하면 수동 여부도 그대로"""
        service = create_service(create_provider(ExchangeRateUnavailableError("down")))
        service.set_manual(1400)

        assert service.refresh(force=True) is False
        assert service.get() == 1400.0
        assert service.is_manual_rate

    def test_manual_range(self):
        service = create_service(create_provider())
        with pytest.raises(ValueError):
            service.set_manual(700)
        with pytest.raises(ValueError):
            service.set_manual(2100)

    def test_clear_manual(self):
        provider = create_provider(1350.0)
        service = create_service(provider)
        service.set_manual(1400)

        service.clear_manual(refresh=False)
        assert not service.is_manual_rate
        assert service.get() == 1400.0
        provider.fetch_usd_to_krw_rate.assert_not_called()

        service.clear_manual(refresh=True)
        assert service.get() == 1350.0


class TestStatePersistence:
    """상태 저장소 연동 테스트"""

    def test_loads_saved_state(self):
        state_repo = Mock(spec=ExchangeRateStateRepository)
        state_repo.load.return_value = ExchangeRateState(1380.0, 1_700_000_000.0, True)

        service = create_service(create_provider(), state_repo=state_repo)
        assert service.get() == 1380.0
        assert service.is_manual_rate

    def test_saves_on_change(self):
        state_repo = Mock(spec=ExchangeRateStateRepository)
        state_repo.load.return_value = None

        service = create_service(create_provider(1350.0), state_repo=state_repo)
        service.refresh()
        service.set_manual(1400)

        saved = [c.args[0] for c in state_repo.save.call_args_list]
        assert [s.usd_to_krw_rate for s in saved] == [1350.0, 1400.0]
        assert saved[-1].is_manual_rate
        print("✅ test_saves_on_change PASSED")
