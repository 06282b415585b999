"""
MindStock APScheduler 설정 및 관리 모듈

모든 초기화 로직을 내부에서 처리하여 main에서는 단순 호출만 합니다.
- 환율 갱신: 30분 주기 (수동 환율 사용 중이면 건너뜀)
- 마인드맵 시뮬레이션: 세션 시작 시 SimulationJobs가 interval 작업으로 구동
"""
import traceback
from datetime import datetime
from typing import Optional

import pytz
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from config.item import EXCHANGE_RATE_UPDATE_MINUTES
from config.dependencies import get_dependencies
from presentation.scheduler.simulation_jobs import SimulationJobs

# KST 시간대 명시
KST = pytz.timezone('Asia/Seoul')

EXCHANGE_RATE_JOB_ID = 'exchange_rate_job'

# 전역 인스턴스
_scheduler: Optional[BackgroundScheduler] = None
_simulation_jobs: Optional[SimulationJobs] = None


def _create_exchange_rate_job():
    """환율 갱신 작업 팩토리 (클로저)"""

    def exchange_rate_job_impl():
        deps = get_dependencies()
        try:
            updated = deps.exchange_rate_service.refresh()
            if updated:
                print(f"💱 exchange_rate_job() rate={deps.exchange_rate_service.get()} at {datetime.now(KST)}")
        except Exception as e:
            print(f"❌ [exchange_rate_job] 환율 갱신 중 문제가 발생하였습니다.\n{e}\n{traceback.format_exc()}")

    return exchange_rate_job_impl


def get_simulation_jobs() -> Optional[SimulationJobs]:
    """스케줄러가 시작되지 않았으면 None"""
    return _simulation_jobs


def start_scheduler():
    """
    스케줄러를 시작합니다.
    (main에서는 이 함수만 호출하면 됨)

    - 첫 호출: 스케줄러 생성 + 작업 등록 + 시작
    - 재호출: 작업만 재등록
    """
    global _scheduler, _simulation_jobs

    print("🔄 Scheduler 시작...")
    deps = get_dependencies()

    # APScheduler 생성 (첫 호출에만)
    if _scheduler is None:
        _scheduler = BackgroundScheduler(timezone=KST)

    _scheduler.remove_all_jobs()

    # 시작 시 한 번 갱신 후 주기 등록
    exchange_rate_job = _create_exchange_rate_job()
    exchange_rate_job()
    _scheduler.add_job(
        exchange_rate_job,
        IntervalTrigger(minutes=EXCHANGE_RATE_UPDATE_MINUTES, timezone=KST),
        id=EXCHANGE_RATE_JOB_ID,
        replace_existing=True,
    )
    print(f"✅ {EXCHANGE_RATE_JOB_ID} every {EXCHANGE_RATE_UPDATE_MINUTES} minutes")

    _simulation_jobs = SimulationJobs(
        mind_map_usecase=deps.mind_map_usecase,
        scheduler=_scheduler,
    )

    if not _scheduler.running:
        _scheduler.start()
        print(f"\n🚀 Scheduler started (timezone: {KST})")
    else:
        print("\n🔄 Scheduler running (스케줄 재등록 완료)")

    jobs = _scheduler.get_jobs()
    print(f"\n📋 등록된 작업 ({len(jobs)}개):")
    for j in jobs:
        print(f"  - {j.id}: next_run={j.next_run_time}")
    print()


def stop_scheduler():
    """스케줄러를 중지합니다."""
    global _scheduler, _simulation_jobs
    if _simulation_jobs is not None:
        _simulation_jobs.stop()
        _simulation_jobs = None
    if _scheduler and _scheduler.running:
        _scheduler.shutdown(wait=True)
        print("⏹️ Scheduler stopped.")
    _scheduler = None
