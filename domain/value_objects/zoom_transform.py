"""ZoomTransform Value Object - 화면 확대/이동 변환"""
from dataclasses import dataclass
from typing import Tuple

MIN_SCALE = 0.1
MAX_SCALE = 4.0


def clamp_scale(k: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, k))


@dataclass(frozen=True)
class ZoomTransform:
    """
    화면 좌표 = 시뮬레이션 좌표 * k + (x, y)

    시뮬레이션 내부 좌표계와 독립적인 어파인 변환이며, 배율은 [0.1, 4]로 제한됩니다.
    """
    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, px: float, py: float) -> Tuple[float, float]:
        """시뮬레이션 좌표 → 화면 좌표"""
        return px * self.k + self.x, py * self.k + self.y

    def invert(self, sx: float, sy: float) -> Tuple[float, float]:
        """화면 좌표 → 시뮬레이션 좌표"""
        return (sx - self.x) / self.k, (sy - self.y) / self.k

    def scale_by(self, factor: float, center_x: float = 0.0, center_y: float = 0.0) -> 'ZoomTransform':
        """
        화면상의 한 점(center)을 고정한 채 배율 변경

        Args:
            factor: 배율 곱 (1보다 크면 확대)
            center_x: 기준점 화면 x
            center_y: 기준점 화면 y

        Returns:
            ZoomTransform: 새 변환 (배율은 범위 내로 제한)
        """
        if factor <= 0:
            raise ValueError("factor는 0보다 커야 합니다")
        new_k = clamp_scale(self.k * factor)
        # center 아래의 시뮬레이션 좌표가 그대로 유지되도록 이동량 보정
        px, py = self.invert(center_x, center_y)
        return ZoomTransform(new_k, center_x - px * new_k, center_y - py * new_k)

    def translate_by(self, dx: float, dy: float) -> 'ZoomTransform':
        return ZoomTransform(self.k, self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        return {'k': self.k, 'x': self.x, 'y': self.y}
