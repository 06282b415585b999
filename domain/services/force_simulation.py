"""
Layout Simulation - 마인드맵 force-directed 레이아웃

트리를 노드 + 링크(부모→자식)로 평탄화한 뒤, tick마다 아래 힘을 적용해 위치를 갱신합니다.
- 링크 스프링: 루트와 연결된 링크 150, 그 외 100
- 다체 반발력: -300
- 중심 유지: 전체 무게중심을 화면 중앙으로 이동
- 충돌 방지: 반지름 + 10

alpha(에너지)는 tick마다 alpha_target 쪽으로 감쇠하며, alpha_min 아래로 내려가면 안정(SETTLED) 상태가 됩니다.
fx/fy가 설정된 노드(고정 노드)는 힘의 영향을 받지 않고, 루트는 항상 화면 중앙에 고정됩니다.
"""
import logging
import math
import random
from typing import Callable, Dict, List, Optional, Tuple

from domain.exceptions import SimulationStoppedError
from domain.services.node_style import MIN_RADIUS
from domain.value_objects.mind_map_node import MindMapNode
from domain.value_objects.node_position import NodePosition
from domain.value_objects.simulation_phase import SimulationPhase

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 800
ROOT_LINK_DISTANCE = 150
LINK_DISTANCE = 100
CHARGE_STRENGTH = -300
COLLISION_PADDING = 10

ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - math.pow(ALPHA_MIN, 1 / 300)  # 약 300 tick 후 안정
VELOCITY_DECAY = 0.4
REHEAT_ALPHA_TARGET = 0.3

_INITIAL_RADIUS = 10
_INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))
_DISTANCE_MIN2 = 1.0

TickListener = Callable[[List[NodePosition]], None]


class _Link:
    __slots__ = ('source', 'target', 'distance', 'strength', 'bias')

    def __init__(self, source: MindMapNode, target: MindMapNode, distance: float):
        self.source = source
        self.target = target
        self.distance = distance
        self.strength = 1.0
        self.bias = 0.5


class ForceSimulation:
    """
    반복 완화(relaxation) 방식의 레이아웃 시뮬레이션

    host(스케줄러, 웹 요청 등)가 step()을 반복 호출하고 결과 위치를 전달합니다.
    데이터가 바뀌거나 화면이 닫히면 stop()으로 명시적으로 중지해야 하며,
    중지된 시뮬레이션의 step()은 SimulationStoppedError를 발생시킵니다.
    """

    def __init__(
        self,
        root: MindMapNode,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        link_distance_root: float = ROOT_LINK_DISTANCE,
        link_distance: float = LINK_DISTANCE,
        charge_strength: float = CHARGE_STRENGTH,
        collision_padding: float = COLLISION_PADDING,
        alpha_min: float = ALPHA_MIN,
        alpha_decay: float = ALPHA_DECAY,
        velocity_decay: float = VELOCITY_DECAY,
        seed: Optional[int] = None,
        max_iterations: Optional[int] = None,
        previous_positions: Optional[Dict[str, Tuple[float, float]]] = None,
        previous_pins: Optional[Dict[str, Tuple[float, float]]] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError("width, height는 0보다 커야 합니다")

        self.root = root
        self.width = width
        self.height = height
        self.center_x = width / 2
        self.center_y = height / 2
        self.charge_strength = charge_strength
        self.collision_padding = collision_padding
        self.alpha = 1.0
        self.alpha_min = alpha_min
        self.alpha_decay = alpha_decay
        self.alpha_target = 0.0
        self.velocity_decay = velocity_decay
        self.max_iterations = max_iterations
        self.tick_count = 0
        self.phase = SimulationPhase.INITIALIZING

        self._random = random.Random(seed)
        self._listeners: List[TickListener] = []

        self.nodes, link_pairs = root.flatten()
        self._by_id: Dict[str, MindMapNode] = {node.id: node for node in self.nodes}
        self.links = [
            _Link(
                self._by_id[s],
                self._by_id[t],
                link_distance_root if root.id in (s, t) else link_distance,
            )
            for s, t in link_pairs
        ]

        self._initialize_nodes(previous_positions or {}, previous_pins or {})
        self._initialize_links()

    # === 초기화 ===

    def _initialize_nodes(
        self,
        previous_positions: Dict[str, Tuple[float, float]],
        previous_pins: Dict[str, Tuple[float, float]],
    ):
        for i, node in enumerate(self.nodes):
            if node is self.root:
                node.fx, node.fy = self.center_x, self.center_y
            elif node.id in previous_pins:
                node.fx, node.fy = previous_pins[node.id]

            if node is not self.root and node.fx is not None and node.fy is not None:
                node.x, node.y = node.fx, node.fy
            elif node.id in previous_positions:
                node.x, node.y = previous_positions[node.id]
            elif node.fx is not None and node.fy is not None:
                node.x, node.y = node.fx, node.fy
            else:
                # phyllotaxis 나선 배치 (중앙 기준)
                radius = _INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * _INITIAL_ANGLE
                node.x = self.center_x + radius * math.cos(angle)
                node.y = self.center_y + radius * math.sin(angle)
            node.vx = 0.0
            node.vy = 0.0

    def _initialize_links(self):
        count: Dict[str, int] = {}
        for link in self.links:
            count[link.source.id] = count.get(link.source.id, 0) + 1
            count[link.target.id] = count.get(link.target.id, 0) + 1
        for link in self.links:
            cs, ct = count[link.source.id], count[link.target.id]
            link.bias = cs / (cs + ct)
            link.strength = 1 / min(cs, ct)

    def _jiggle(self) -> float:
        return (self._random.random() - 0.5) * 1e-6

    def _radius(self, node: MindMapNode) -> float:
        return (node.radius if node.radius is not None else MIN_RADIUS) + self.collision_padding

    # === 힘 ===

    def _apply_link_force(self, alpha: float):
        for link in self.links:
            source, target = link.source, link.target
            x = target.x + target.vx - source.x - source.vx or self._jiggle()
            y = target.y + target.vy - source.y - source.vy or self._jiggle()
            length = math.sqrt(x * x + y * y)
            length = (length - link.distance) / length * alpha * link.strength
            x *= length
            y *= length
            b = link.bias
            target.vx -= x * b
            target.vy -= y * b
            source.vx += x * (1 - b)
            source.vy += y * (1 - b)

    def _apply_many_body_force(self, alpha: float):
        nodes = self.nodes
        for node in nodes:
            for other in nodes:
                if other is node:
                    continue
                x = other.x - node.x
                y = other.y - node.y
                l2 = x * x + y * y
                if x == 0:
                    x = self._jiggle()
                    l2 += x * x
                if y == 0:
                    y = self._jiggle()
                    l2 += y * y
                if l2 < _DISTANCE_MIN2:
                    l2 = math.sqrt(_DISTANCE_MIN2 * l2)
                node.vx += x * self.charge_strength * alpha / l2
                node.vy += y * self.charge_strength * alpha / l2

    def _apply_center_force(self):
        n = len(self.nodes)
        sx = sum(node.x for node in self.nodes) / n - self.center_x
        sy = sum(node.y for node in self.nodes) / n - self.center_y
        for node in self.nodes:
            node.x -= sx
            node.y -= sy

    def _apply_collide_force(self):
        nodes = self.nodes
        radii = [self._radius(node) for node in nodes]
        for i, node in enumerate(nodes):
            ri = radii[i]
            ri2 = ri * ri
            xi = node.x + node.vx
            yi = node.y + node.vy
            for j in range(i + 1, len(nodes)):
                other = nodes[j]
                rj = radii[j]
                r = ri + rj
                x = xi - other.x - other.vx
                y = yi - other.y - other.vy
                l2 = x * x + y * y
                if l2 >= r * r:
                    continue
                if x == 0:
                    x = self._jiggle()
                    l2 += x * x
                if y == 0:
                    y = self._jiggle()
                    l2 += y * y
                length = math.sqrt(l2)
                length = (r - length) / length
                x *= length
                y *= length
                rj2 = rj * rj
                share = rj2 / (ri2 + rj2)
                node.vx += x * share
                node.vy += y * share
                other.vx -= x * (1 - share)
                other.vy -= y * (1 - share)

    # === 진행 ===

    def _tick(self):
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

        self._apply_link_force(self.alpha)
        self._apply_many_body_force(self.alpha)
        self._apply_center_force()
        self._apply_collide_force()

        damping = 1 - self.velocity_decay
        for node in self.nodes:
            if node.fx is None:
                node.vx *= damping
                node.x += node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy *= damping
                node.y += node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

        self.tick_count += 1

    def _reached_iteration_cap(self) -> bool:
        # 재가열(드래그) 중에는 상한을 적용하지 않음
        if self.max_iterations is None or self.alpha_target > 0:
            return False
        return self.tick_count >= self.max_iterations

    def step(self) -> List[NodePosition]:
        """
        한 tick 진행 후 모든 노드 위치 반환

        Returns:
            List[NodePosition]: tick 이후 위치

        Raises:
            SimulationStoppedError: stop() 이후 호출한 경우
        """
        if self.phase == SimulationPhase.STOPPED:
            raise SimulationStoppedError("중지된 시뮬레이션입니다")

        self._tick()

        if self.alpha < self.alpha_min or self._reached_iteration_cap():
            if self.phase != SimulationPhase.SETTLED:
                logger.debug(f"simulation settled after {self.tick_count} ticks (alpha={self.alpha:.5f})")
            self.phase = SimulationPhase.SETTLED
        else:
            self.phase = SimulationPhase.COOLING

        positions = self.positions()
        for listener in list(self._listeners):
            listener(positions)
        return positions

    def run(self, max_ticks: Optional[int] = None) -> List[NodePosition]:
        """
        안정 상태가 될 때까지 (또는 max_ticks만큼) 반복

        Returns:
            List[NodePosition]: 마지막 위치
        """
        positions = self.positions()
        ticks = 0
        while not self.is_settled:
            if max_ticks is not None and ticks >= max_ticks:
                break
            positions = self.step()
            ticks += 1
        return positions

    @property
    def is_settled(self) -> bool:
        return self.phase == SimulationPhase.SETTLED

    @property
    def is_stopped(self) -> bool:
        return self.phase == SimulationPhase.STOPPED

    def positions(self) -> List[NodePosition]:
        return [
            NodePosition(
                id=node.id,
                x=node.x,
                y=node.y,
                vx=node.vx,
                vy=node.vy,
                pinned=node.fx is not None,
            )
            for node in self.nodes
        ]

    def position_map(self) -> Dict[str, Tuple[float, float]]:
        """노드 id → (x, y), 재생성 시 previous_positions로 사용"""
        return {node.id: (node.x, node.y) for node in self.nodes}

    def pin_map(self) -> Dict[str, Tuple[float, float]]:
        """고정된 노드 id → (fx, fy), 루트 제외. 재생성 시 previous_pins로 사용"""
        return {
            node.id: (node.fx, node.fy)
            for node in self.nodes
            if node is not self.root and node.fx is not None and node.fy is not None
        }

    # === 외부 제어 ===

    def _ensure_running(self):
        if self.phase == SimulationPhase.STOPPED:
            raise SimulationStoppedError("중지된 시뮬레이션입니다")

    def reheat(self, alpha_target: float = REHEAT_ALPHA_TARGET) -> None:
        """에너지 목표를 올려 움직임 재개 (드래그 시작)"""
        self._ensure_running()
        self.alpha_target = alpha_target
        if self.phase == SimulationPhase.SETTLED:
            self.phase = SimulationPhase.COOLING

    def cool(self) -> None:
        """에너지 목표를 0으로 되돌림 (드래그 종료)"""
        self._ensure_running()
        self.alpha_target = 0.0

    def get_node(self, node_id: str) -> MindMapNode:
        """
        Raises:
            KeyError: 알 수 없는 노드 id
        """
        return self._by_id[node_id]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._by_id

    def is_root(self, node_id: str) -> bool:
        return node_id == self.root.id

    def pin(self, node_id: str, x: float, y: float) -> None:
        """
        노드 위치 고정 (fx, fy)

        Raises:
            KeyError: 알 수 없는 노드 id
            ValueError: 루트 노드 (항상 중앙 고정)
        """
        node = self.get_node(node_id)
        if node is self.root:
            raise ValueError("루트 노드는 이동할 수 없습니다")
        node.fx = x
        node.fy = y

    def unpin(self, node_id: str) -> None:
        """노드 고정 해제 (루트는 해제되지 않음)"""
        node = self.get_node(node_id)
        if node is self.root:
            return
        node.fx = None
        node.fy = None

    def add_listener(self, listener: TickListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def stop(self) -> None:
        """시뮬레이션 중지 (이후 step 불가, 리스너 해제)"""
        if self.phase != SimulationPhase.STOPPED:
            logger.debug(f"simulation stopped at tick {self.tick_count}")
        self.phase = SimulationPhase.STOPPED
        self._listeners.clear()

    def __repr__(self):
        return (f"ForceSimulation(nodes={len(self.nodes)}, links={len(self.links)}, "
                f"alpha={self.alpha:.4f}, phase={self.phase})")
