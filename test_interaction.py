"""마인드맵 인터랙션(클릭/호버/드래그/줌) 테스트"""
import sys
import os
from unittest.mock import Mock

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from domain.services.force_simulation import ForceSimulation, REHEAT_ALPHA_TARGET
from domain.services.interaction import InteractionController
from domain.services.node_style import annotate_tree
from domain.services.portfolio_transform import transform_holdings_to_mind_map
from domain.value_objects.zoom_transform import ZoomTransform
from usecase.portfolio_usecase import create_sample_holdings


def create_controller(on_select=None, release_on_drag_end=False):
    tree = annotate_tree(transform_holdings_to_mind_map(create_sample_holdings()))
    simulation = ForceSimulation(tree, seed=1)
    return InteractionController(simulation, on_select=on_select, release_on_drag_end=release_on_drag_end)


class TestSelection:
    """클릭/선택 테스트"""

    def test_click_emits_detail(self):
        """선택한 노드 상세 정보를 콜백으로 전달"""
        on_select = Mock()
        controller = create_controller(on_select=on_select)

        detail = controller.click("sector-IT")

        on_select.assert_called_once_with(detail)
        assert controller.selected_node_id == "sector-IT"
        assert detail.name == "IT"
        assert detail.node_type == "category"
        assert detail.children == ["삼성전자", "SK하이닉스", "NAVER"]
        assert detail.color is not None

    def test_clear_selection(self):
        on_select = Mock()
        controller = create_controller(on_select=on_select)
        controller.click("stock-005930")
        controller.clear_selection()

        on_select.assert_called_with(None)
        assert controller.selected_node_id is None

    def test_click_unknown(self):
        controller = create_controller()
        with pytest.raises(KeyError):
            controller.click("stock-UNKNOWN")


class TestHover:
    """호버 툴팁 테스트"""

    def test_tooltip_offset(self):
        """툴팁은 커서 기준 (+10, -10)"""
        controller = create_controller()
        tooltip = controller.hover("stock-005930", 200.0, 150.0)

        assert (tooltip.x, tooltip.y) == (210.0, 140.0)
        assert tooltip.name == "삼성전자"
        assert controller.tooltip is tooltip

        controller.leave()
        assert controller.tooltip is None


class TestDrag:
    """드래그 테스트"""

    def test_drag_start_reheats_and_pins(self):
        controller = create_controller()
        simulation = controller.simulation
        node = simulation.get_node("stock-005930")

        controller.drag_start("stock-005930")

        assert controller.is_dragging
        assert simulation.alpha_target == REHEAT_ALPHA_TARGET
        assert (node.fx, node.fy) == (node.x, node.y)

    def test_drag_root_rejected(self):
        controller = create_controller()
        with pytest.raises(ValueError):
            controller.drag_start("root")
        assert not controller.is_dragging

    def test_drag_move_uses_inverse_transform(self):
        """화면 좌표 → 시뮬레이션 좌표로 변환해 고정"""
        controller = create_controller()
        controller.transform = ZoomTransform(k=2.0, x=100.0, y=50.0)
        controller.drag_start("stock-005930")

        x, y = controller.drag_move("stock-005930", 300.0, 250.0)

        node = controller.simulation.get_node("stock-005930")
        assert (x, y) == (100.0, 100.0)
        assert (node.fx, node.fy) == (100.0, 100.0)

    def test_drag_move_without_start(self):
        controller = create_controller()
        with pytest.raises(ValueError):
            controller.drag_move("stock-005930", 1.0, 1.0)

    def test_drag_end_keeps_pin_by_default(self):
        """기본 설정은 드래그 종료 후에도 고정 유지"""
        controller = create_controller()
        controller.drag_start("stock-005930")
        controller.drag_move("stock-005930", 10.0, 10.0)
        controller.drag_end("stock-005930")

        node = controller.simulation.get_node("stock-005930")
        assert controller.simulation.alpha_target == 0.0
        assert (node.fx, node.fy) == (10.0, 10.0)

    def test_drag_end_release(self):
        """release_on_drag_end=True면 고정 해제"""
        controller = create_controller(release_on_drag_end=True)
        controller.drag_start("stock-005930")
        controller.drag_end("stock-005930")

        node = controller.simulation.get_node("stock-005930")
        assert node.fx is None and node.fy is None

    def test_concurrent_drags(self):
        """마지막 드래그가 끝날 때만 냉각"""
        controller = create_controller()
        controller.drag_start("stock-005930")
        controller.drag_start("stock-000660")

        controller.drag_end("stock-005930")
        assert controller.simulation.alpha_target == REHEAT_ALPHA_TARGET

        controller.drag_end("stock-000660")
        assert controller.simulation.alpha_target == 0.0
        print("✅ test_concurrent_drags PASSED")


class TestZoom:
    """줌/팬 테스트"""

    def test_scale_clamped(self):
        """배율은 [0.1, 4]"""
        controller = create_controller()
        assert controller.zoom(100).k == 4.0
        assert controller.zoom(0.0001).k == 0.1

    def test_zoom_keeps_center_point(self):
        """기준점 아래의 시뮬레이션 좌표는 그대로"""
        controller = create_controller()
        transform = controller.zoom(2.0, 100.0, 100.0)

        assert transform.k == 2.0
        assert transform.invert(100.0, 100.0) == (100.0, 100.0)
        assert (transform.x, transform.y) == (-100.0, -100.0)

    def test_pan_and_reset(self):
        controller = create_controller()
        controller.pan(15.0, -5.0)
        assert (controller.transform.x, controller.transform.y) == (15.0, -5.0)

        controller.reset_zoom()
        assert controller.transform == ZoomTransform()

    def test_invalid_factor(self):
        controller = create_controller()
        with pytest.raises(ValueError):
            controller.zoom(0)

    def test_to_screen(self):
        controller = create_controller()
        controller.transform = ZoomTransform(k=2.0, x=10.0, y=20.0)
        root = controller.simulation.root
        assert controller.to_screen("root") == (root.x * 2 + 10, root.y * 2 + 20)
