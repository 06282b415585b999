"""MindMap Usecase - 마인드맵 트리 생성, 레이아웃, 인터랙티브 세션"""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from config.item import MIND_MAP_HEIGHT, MIND_MAP_WIDTH, RELEASE_ON_DRAG_END
from domain.entities.portfolio import Portfolio
from domain.exceptions import SimulationStoppedError
from domain.services.force_simulation import ForceSimulation
from domain.services.interaction import InteractionController
from domain.services.node_style import annotate_tree
from domain.services.portfolio_transform import transform_portfolio_to_mind_map
from domain.value_objects.mind_map_node import MindMapNode
from domain.value_objects.node_detail import NodeDetail
from domain.value_objects.view_mode import ViewMode
from usecase.portfolio_usecase import PortfolioUsecase

logger = logging.getLogger(__name__)

DRAG_START = 'start'
DRAG_MOVE = 'move'
DRAG_END = 'end'


def _links_to_dicts(simulation: ForceSimulation) -> List[dict]:
    return [{'source': link.source.id, 'target': link.target.id} for link in simulation.links]


class MindMapSession:
    """
    화면 하나에 대응하는 시뮬레이션 + 인터랙션 묶음

    선택 노드 상세 정보는 on_select 콜백으로 전달받아 보관합니다.
    """

    def __init__(
            self,
            view_mode: ViewMode,
            tree: MindMapNode,
            simulation: ForceSimulation,
            release_on_drag_end: bool,
    ):
        self.view_mode = view_mode
        self.tree = tree
        self.simulation = simulation
        self.selected: Optional[NodeDetail] = None
        self.controller = InteractionController(
            simulation,
            on_select=self._on_select,
            release_on_drag_end=release_on_drag_end,
        )

    def _on_select(self, detail: Optional[NodeDetail]) -> None:
        self.selected = detail

    @property
    def is_active(self) -> bool:
        return not self.simulation.is_stopped

    def to_dict(self, include_tree: bool = False) -> dict:
        simulation = self.simulation
        data = {
            'active': self.is_active,
            'viewMode': str(self.view_mode),
            'phase': str(simulation.phase),
            'alpha': simulation.alpha,
            'tickCount': simulation.tick_count,
            'settled': simulation.is_settled,
            'positions': [p.to_dict() for p in simulation.positions()],
            'transform': self.controller.transform.to_dict(),
            'selected': self.selected.to_dict() if self.selected else None,
            'tooltip': self.controller.tooltip.to_dict() if self.controller.tooltip else None,
        }
        if include_tree:
            data['tree'] = self.tree.to_dict()
            data['links'] = _links_to_dicts(simulation)
        return data


class MindMapUsecase:
    """마인드맵 Usecase"""

    def __init__(
            self,
            portfolio_usecase: PortfolioUsecase,
            release_on_drag_end: bool = RELEASE_ON_DRAG_END,
            width: float = MIND_MAP_WIDTH,
            height: float = MIND_MAP_HEIGHT,
    ):
        """
        MindMap Usecase 초기화

        Args:
            portfolio_usecase: PortfolioUsecase (포트폴리오 변경 시 진행 중인 세션을 중지)
            release_on_drag_end: 드래그 종료 시 노드 고정 해제 여부
            width: 기본 화면 너비
            height: 기본 화면 높이
        """
        self.portfolio_usecase = portfolio_usecase
        self.release_on_drag_end = release_on_drag_end
        self.width = width
        self.height = height
        self._session: Optional[MindMapSession] = None
        self._lock = threading.RLock()

        portfolio_usecase.add_listener(self._on_portfolio_changed)

    # === 트리 / 레이아웃 ===

    def build_tree(self, view_mode=ViewMode.SECTOR) -> MindMapNode:
        """현재 포트폴리오를 보기 모드에 맞는 트리로 변환 (radius, color 포함)"""
        portfolio = self.portfolio_usecase.get_portfolio()
        return annotate_tree(transform_portfolio_to_mind_map(portfolio, ViewMode.parse(view_mode)))

    def _create_simulation(
            self,
            tree: MindMapNode,
            width: Optional[float],
            height: Optional[float],
            seed: Optional[int],
            previous_positions: Optional[Dict[str, Tuple[float, float]]] = None,
            previous_pins: Optional[Dict[str, Tuple[float, float]]] = None,
    ) -> ForceSimulation:
        return ForceSimulation(
            tree,
            width=self.width if width is None else width,
            height=self.height if height is None else height,
            seed=seed,
            previous_positions=previous_positions,
            previous_pins=previous_pins,
        )

    def layout(
            self,
            view_mode=ViewMode.SECTOR,
            width: Optional[float] = None,
            height: Optional[float] = None,
            ticks: Optional[int] = None,
            seed: Optional[int] = None,
    ) -> dict:
        """
        안정 상태까지 한 번에 레이아웃 계산

        Args:
            ticks: 최대 tick 수 (None이면 안정될 때까지)
            seed: 난수 시드 (같은 시드면 같은 결과)

        Returns:
            Dict: {"viewMode", "width", "height", "tickCount", "settled", "nodes": [...], "links": [...]}
        """
        mode = ViewMode.parse(view_mode)
        tree = self.build_tree(mode)
        simulation = self._create_simulation(tree, width, height, seed)
        try:
            simulation.run(max_ticks=ticks)
            return {
                'viewMode': str(mode),
                'width': simulation.width,
                'height': simulation.height,
                'tickCount': simulation.tick_count,
                'settled': simulation.is_settled,
                'nodes': [node.to_dict(include_children=False) for node in simulation.nodes],
                'links': _links_to_dicts(simulation),
            }
        finally:
            simulation.stop()

    # === 세션 ===

    def _on_portfolio_changed(self, portfolio: Portfolio) -> None:
        with self._lock:
            if self._session and self._session.is_active:
                logger.info("포트폴리오 변경 - 진행 중인 시뮬레이션 중지")
                self._session.simulation.stop()

    def start_session(
            self,
            view_mode=ViewMode.SECTOR,
            width: Optional[float] = None,
            height: Optional[float] = None,
            seed: Optional[int] = None,
    ) -> MindMapSession:
        """
        새 인터랙티브 세션 시작 (기존 세션은 중지)

        같은 id의 노드는 이전 세션의 위치에서 시작합니다.
        release_on_drag_end가 False이면 사용자가 고정한 노드는 고정 위치를 유지합니다.
        """
        mode = ViewMode.parse(view_mode)
        tree = self.build_tree(mode)
        with self._lock:
            previous, pins = None, None
            if self._session is not None:
                previous = self._session.simulation.position_map()
                if not self.release_on_drag_end:
                    pins = self._session.simulation.pin_map()
                self._session.simulation.stop()

            simulation = self._create_simulation(tree, width, height, seed, previous, pins)
            self._session = MindMapSession(mode, tree, simulation, self.release_on_drag_end)
            logger.info(f"마인드맵 세션 시작 (viewMode={mode}, nodes={len(simulation.nodes)})")
            return self._session

    def stop_session(self) -> bool:
        """
        Returns:
            bool: 중지한 세션이 있으면 True
        """
        with self._lock:
            if self._session is None:
                return False
            self._session.simulation.stop()
            self._session = None
            return True

    def get_session(self) -> Optional[MindMapSession]:
        return self._session

    def _active_session(self) -> MindMapSession:
        session = self._session
        if session is None or not session.is_active:
            raise SimulationStoppedError("진행 중인 마인드맵 세션이 없습니다")
        return session

    def step(self, ticks: int = 1) -> MindMapSession:
        """
        세션 시뮬레이션을 ticks만큼 진행 (안정 상태면 멈춤)

        Raises:
            SimulationStoppedError: 세션이 없거나 중지된 경우
        """
        with self._lock:
            session = self._active_session()
            for _ in range(max(1, ticks)):
                session.simulation.step()
                if session.simulation.is_settled:
                    break
            return session

    def drag(self, action: str, node_id: str, x: Optional[float] = None, y: Optional[float] = None) -> MindMapSession:
        """
        드래그 이벤트 전달

        Args:
            action: 'start' | 'move' | 'end'
            x, y: 'move'일 때 화면 좌표

        Raises:
            ValueError: 알 수 없는 action, 좌표 누락, 루트 노드 드래그
            KeyError: 알 수 없는 노드 id
            SimulationStoppedError: 진행 중인 세션이 없는 경우
        """
        with self._lock:
            session = self._active_session()
            controller = session.controller
            if action == DRAG_START:
                controller.drag_start(node_id)
            elif action == DRAG_MOVE:
                if x is None or y is None:
                    raise ValueError("x, y 좌표가 필요합니다")
                controller.drag_move(node_id, float(x), float(y))
            elif action == DRAG_END:
                controller.drag_end(node_id)
            else:
                raise ValueError(f"알 수 없는 드래그 동작: {action}")
            return session

    def select(self, node_id: Optional[str]) -> Optional[NodeDetail]:
        """노드 선택 (node_id가 None이면 선택 해제)"""
        with self._lock:
            session = self._active_session()
            if node_id is None:
                session.controller.clear_selection()
                return None
            return session.controller.click(node_id)

    def hover(self, node_id: Optional[str], x: float = 0.0, y: float = 0.0):
        """노드 호버 (node_id가 None이면 툴팁 해제)"""
        with self._lock:
            session = self._active_session()
            if node_id is None:
                session.controller.leave()
                return None
            return session.controller.hover(node_id, float(x), float(y))

    def zoom(
            self,
            factor: Optional[float] = None,
            center_x: float = 0.0,
            center_y: float = 0.0,
            dx: float = 0.0,
            dy: float = 0.0,
            reset: bool = False,
    ):
        """줌/팬 (reset=True면 초기 변환으로)"""
        with self._lock:
            controller = self._active_session().controller
            if reset:
                return controller.reset_zoom()
            if factor is not None:
                controller.zoom(float(factor), float(center_x), float(center_y))
            if dx or dy:
                controller.pan(float(dx), float(dy))
            return controller.transform
