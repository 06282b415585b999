"""SimulationPhase Value Object - 레이아웃 시뮬레이션 상태"""
from enum import Enum


class SimulationPhase(Enum):
    """시뮬레이션 진행 단계"""
    INITIALIZING = 'initializing'  # alpha=1, 첫 tick 이전
    COOLING = 'cooling'            # alpha 감쇠 중
    SETTLED = 'settled'            # alpha < alpha_min, 위치 안정
    STOPPED = 'stopped'            # 명시적으로 중지됨

    def __str__(self):
        return self.value
