"""ViewMode Value Object - 마인드맵 그룹화 기준"""
from enum import Enum


class ViewMode(Enum):
    """마인드맵 보기 모드"""
    SECTOR = 'sector'            # 섹터별
    PROFIT_LOSS = 'profitLoss'   # 수익률 구간별
    THEME = 'theme'              # 테마(태그)별

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value) -> 'ViewMode':
        """
        문자열을 ViewMode로 변환

        'tag'는 THEME의 별칭이며, 알 수 없는 값은 SECTOR로 처리합니다.

        Args:
            value: 'sector' | 'profitLoss' | 'theme' | 'tag' 또는 ViewMode

        Returns:
            ViewMode
        """
        if isinstance(value, ViewMode):
            return value
        if value == 'tag':
            return cls.THEME
        for mode in cls:
            if mode.value == value:
                return mode
        return cls.SECTOR
