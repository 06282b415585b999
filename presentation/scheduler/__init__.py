"""Scheduler - 스케줄러 패키지

APScheduler 기반 스케줄러 설정 및 환율/시뮬레이션 작업들을 포함합니다.

사용법:
    from presentation.scheduler.scheduler_config import start_scheduler
    start_scheduler()  # 모든 초기화가 자동으로 처리됨
"""
from presentation.scheduler.scheduler_config import (
    get_simulation_jobs,
    start_scheduler,
    stop_scheduler,
)
from presentation.scheduler.simulation_jobs import SimulationJobs

__all__ = [
    'get_simulation_jobs',
    'start_scheduler',
    'stop_scheduler',
    'SimulationJobs',
]
