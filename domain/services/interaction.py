"""Interaction Layer - 마인드맵 클릭/호버/드래그/줌 처리"""
from typing import Callable, Optional, Set, Tuple

from domain.services.force_simulation import ForceSimulation, REHEAT_ALPHA_TARGET
from domain.value_objects.mind_map_node import MindMapNode
from domain.value_objects.node_detail import NodeDetail, Tooltip, TOOLTIP_OFFSET_X, TOOLTIP_OFFSET_Y
from domain.value_objects.zoom_transform import ZoomTransform


SelectCallback = Callable[[Optional[NodeDetail]], None]


def build_node_detail(node: MindMapNode) -> NodeDetail:
    return NodeDetail(
        id=node.id,
        name=node.name,
        node_type=str(node.node_type),
        value=node.value,
        profit_loss=node.profit_loss,
        profit_loss_rate=node.profit_loss_rate,
        color=node.color,
        symbol=node.symbol,
        sector=node.sector,
        tags=list(node.tags),
        day_change_rate=node.day_change_rate,
        children=[child.name for child in node.children or []],
    )


class InteractionController:
    """
    사용자 입력을 시뮬레이션에 전달하는 컨트롤러

    - 클릭: 선택 노드 상세 정보를 on_select 콜백으로 전달 (내부 상태는 선택 노드 id 뿐)
    - 호버: 커서 위치의 툴팁, 마우스가 벗어나면 해제
    - 드래그: 노드를 커서 위치에 고정하고 시뮬레이션 재가열
    - 줌/팬: 화면 변환만 바꾸며 시뮬레이션 좌표계는 그대로

    release_on_drag_end가 False이면 드래그를 끝낸 노드는 놓은 자리에 고정된 채로 남습니다.
    """

    def __init__(
        self,
        simulation: ForceSimulation,
        on_select: Optional[SelectCallback] = None,
        release_on_drag_end: bool = False,
        transform: Optional[ZoomTransform] = None,
    ):
        self.simulation = simulation
        self.on_select = on_select
        self.release_on_drag_end = release_on_drag_end
        self.transform = transform or ZoomTransform()
        self.selected_node_id: Optional[str] = None
        self.tooltip: Optional[Tooltip] = None
        self._active_drags: Set[str] = set()

    # === 선택 ===

    def click(self, node_id: str) -> NodeDetail:
        """
        노드 선택

        Raises:
            KeyError: 알 수 없는 노드 id
        """
        detail = build_node_detail(self.simulation.get_node(node_id))
        self.selected_node_id = node_id
        if self.on_select:
            self.on_select(detail)
        return detail

    def clear_selection(self) -> None:
        self.selected_node_id = None
        if self.on_select:
            self.on_select(None)

    # === 호버 ===

    def hover(self, node_id: str, screen_x: float, screen_y: float) -> Tooltip:
        node = self.simulation.get_node(node_id)
        self.tooltip = Tooltip(
            node_id=node.id,
            name=node.name,
            node_type=str(node.node_type),
            value=node.value,
            profit_loss=node.profit_loss,
            profit_loss_rate=node.profit_loss_rate,
            x=screen_x + TOOLTIP_OFFSET_X,
            y=screen_y + TOOLTIP_OFFSET_Y,
        )
        return self.tooltip

    def leave(self) -> None:
        self.tooltip = None

    # === 드래그 ===

    @property
    def is_dragging(self) -> bool:
        return bool(self._active_drags)

    def drag_start(self, node_id: str) -> None:
        """
        드래그 시작: 첫 드래그면 시뮬레이션 재가열, 노드를 현재 위치에 고정

        Raises:
            KeyError: 알 수 없는 노드 id
            ValueError: 루트 노드
        """
        node = self.simulation.get_node(node_id)
        if self.simulation.is_root(node_id):
            raise ValueError("루트 노드는 드래그할 수 없습니다")

        if not self._active_drags:
            self.simulation.reheat(REHEAT_ALPHA_TARGET)
        self._active_drags.add(node_id)
        self.simulation.pin(node_id, node.x, node.y)

    def drag_move(self, node_id: str, screen_x: float, screen_y: float) -> Tuple[float, float]:
        """
        드래그 중: 화면 좌표를 시뮬레이션 좌표로 변환해 고정 위치 갱신

        Returns:
            (x, y): 시뮬레이션 좌표

        Raises:
            ValueError: drag_start 하지 않은 노드
        """
        if node_id not in self._active_drags:
            raise ValueError(f"드래그 중인 노드가 아닙니다: {node_id}")
        x, y = self.transform.invert(screen_x, screen_y)
        self.simulation.pin(node_id, x, y)
        return x, y

    def drag_end(self, node_id: str) -> None:
        """드래그 종료: 남은 드래그가 없으면 에너지 목표를 0으로, 설정에 따라 고정 해제"""
        if node_id not in self._active_drags:
            return
        self._active_drags.discard(node_id)
        if not self._active_drags:
            self.simulation.cool()
        if self.release_on_drag_end:
            self.simulation.unpin(node_id)

    # === 줌/팬 ===

    def zoom(self, factor: float, center_x: float = 0.0, center_y: float = 0.0) -> ZoomTransform:
        self.transform = self.transform.scale_by(factor, center_x, center_y)
        return self.transform

    def pan(self, dx: float, dy: float) -> ZoomTransform:
        self.transform = self.transform.translate_by(dx, dy)
        return self.transform

    def reset_zoom(self) -> ZoomTransform:
        self.transform = ZoomTransform()
        return self.transform

    def to_screen(self, node_id: str) -> Tuple[float, float]:
        node = self.simulation.get_node(node_id)
        return self.transform.apply(node.x, node.y)
