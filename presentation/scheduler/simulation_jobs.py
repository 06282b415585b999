"""시뮬레이션 작업 정의 - 마인드맵 레이아웃 tick 구동

세션이 안정(SETTLED)되거나 중지되면 스스로 작업을 제거합니다.
드래그로 재가열되면 resume()으로 다시 등록됩니다.
"""
import logging

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from config.item import SIMULATION_TICK_SECONDS
from domain.exceptions import SimulationStoppedError
from usecase.mind_map_usecase import MindMapUsecase

logger = logging.getLogger(__name__)

SIMULATION_JOB_ID = 'mind_map_simulation'


class SimulationJobs:
    """마인드맵 시뮬레이션 작업 클래스"""

    def __init__(
            self,
            mind_map_usecase: MindMapUsecase,
            scheduler: BaseScheduler,
            tick_seconds: float = SIMULATION_TICK_SECONDS,
    ):
        """
        Args:
            mind_map_usecase: MindMapUsecase 인스턴스
            scheduler: 작업을 등록할 APScheduler 인스턴스
            tick_seconds: tick 간격 (초)
        """
        self.mind_map_usecase = mind_map_usecase
        self.scheduler = scheduler
        self.tick_seconds = tick_seconds
        self.enabled = False

    @property
    def is_running(self) -> bool:
        return self.scheduler.get_job(SIMULATION_JOB_ID) is not None

    def start(self) -> None:
        """세션 자동 진행 시작"""
        self.enabled = True
        self._add_job()

    def resume(self) -> None:
        """자동 진행 중이던 세션이 재가열되었으면 작업 재등록"""
        if self.enabled and not self.is_running:
            self._add_job()

    def stop(self) -> None:
        """자동 진행 중지"""
        self.enabled = False
        self._remove_job()

    def _add_job(self) -> None:
        self.scheduler.add_job(
            self.tick_job,
            IntervalTrigger(seconds=self.tick_seconds),
            id=SIMULATION_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.debug("simulation job registered")

    def _remove_job(self) -> None:
        if self.is_running:
            self.scheduler.remove_job(SIMULATION_JOB_ID)
            logger.debug("simulation job removed")

    def tick_job(self) -> None:
        """한 tick 진행, 안정/중지 상태면 작업 제거"""
        session = self.mind_map_usecase.get_session()
        if session is None or not session.is_active:
            self.stop()
            return

        try:
            session = self.mind_map_usecase.step()
        except SimulationStoppedError:
            self.stop()
            return

        if session.simulation.is_settled:
            # 재가열 시 resume()으로 다시 등록되도록 enabled는 유지
            self._remove_job()
