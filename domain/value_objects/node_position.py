"""NodePosition Value Object - 시뮬레이션 tick 결과"""
from dataclasses import dataclass


@dataclass(frozen=True)
class NodePosition:
    id: str
    x: float
    y: float
    vx: float
    vy: float
    pinned: bool

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y,
            'vx': self.vx,
            'vy': self.vy,
            'pinned': self.pinned,
        }
