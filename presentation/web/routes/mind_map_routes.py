"""
MindMap Routes - 마인드맵 트리, 레이아웃, 인터랙티브 세션

- GET /api/mindmap?view_mode=sector|profitLoss|theme - 트리 (radius, color 포함)
- POST /api/mindmap/layout - 안정 상태까지 계산한 레이아웃
- GET|POST|DELETE /api/mindmap/session - 세션 조회/시작/중지
- POST /api/mindmap/session/tick - 수동 진행
- POST /api/mindmap/session/drag - 드래그 (start | move | end)
- POST /api/mindmap/session/select - 노드 선택/해제
- POST /api/mindmap/session/hover - 툴팁 표시/해제
- POST /api/mindmap/session/zoom - 줌/팬/초기화
"""
import logging

from flask import Blueprint, request

from config.dependencies import get_dependencies
from domain.exceptions import SimulationStoppedError
from presentation.scheduler.scheduler_config import get_simulation_jobs
from presentation.web.middleware.auth_middleware import require_auth
from presentation.web.responses import (
    NOT_FOUND,
    SIMULATION_STOPPED,
    VALIDATION_ERROR,
    error_response,
    internal_error_response,
    success_response,
)

logger = logging.getLogger(__name__)

mind_map_bp = Blueprint('mind_map', __name__, url_prefix='/api/mindmap')


def _json() -> dict:
    return request.get_json(silent=True) or {}


def _optional_float(data: dict, key: str):
    value = data.get(key)
    return None if value is None else float(value)


def _optional_int(data: dict, key: str):
    value = data.get(key)
    return None if value is None else int(value)


def _session_response(session, include_tree: bool = False):
    return success_response(session.to_dict(include_tree=include_tree))


@mind_map_bp.route('', methods=['GET'])
@require_auth
def get_tree():
    try:
        view_mode = request.args.get('view_mode') or request.args.get('viewMode') or 'sector'
        tree = get_dependencies().mind_map_usecase.build_tree(view_mode)
        return success_response(tree.to_dict())
    except Exception as e:
        logger.exception("마인드맵 트리 생성 실패")
        return internal_error_response(e)


@mind_map_bp.route('/layout', methods=['POST'])
@require_auth
def get_layout():
    """
    Request Body (JSON):
        {"viewMode": str, "width": float, "height": float, "ticks": int, "seed": int}
    """
    try:
        data = _json()
        layout = get_dependencies().mind_map_usecase.layout(
            view_mode=data.get('viewMode', 'sector'),
            width=_optional_float(data, 'width'),
            height=_optional_float(data, 'height'),
            ticks=_optional_int(data, 'ticks'),
            seed=_optional_int(data, 'seed'),
        )
        return success_response(layout)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("마인드맵 레이아웃 계산 실패")
        return internal_error_response(e)


@mind_map_bp.route('/session', methods=['GET'])
@require_auth
def get_session():
    session = get_dependencies().mind_map_usecase.get_session()
    if session is None:
        return error_response(NOT_FOUND, "진행 중인 마인드맵 세션이 없습니다.", 404)
    return _session_response(session)


@mind_map_bp.route('/session', methods=['POST'])
@require_auth
def start_session():
    """
    세션 시작 (기존 세션 중지)

    Request Body (JSON):
        {"viewMode": str, "width": float, "height": float, "seed": int, "autoRun": bool}
        autoRun=True이고 스케줄러가 실행 중이면 tick을 자동으로 진행합니다.
    """
    try:
        data = _json()
        session = get_dependencies().mind_map_usecase.start_session(
            view_mode=data.get('viewMode', 'sector'),
            width=_optional_float(data, 'width'),
            height=_optional_float(data, 'height'),
            seed=_optional_int(data, 'seed'),
        )
        jobs = get_simulation_jobs()
        if jobs is not None:
            if data.get('autoRun', True):
                jobs.start()
            else:
                jobs.stop()
        return _session_response(session, include_tree=True)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("마인드맵 세션 시작 실패")
        return internal_error_response(e)


@mind_map_bp.route('/session', methods=['DELETE'])
@require_auth
def stop_session():
    jobs = get_simulation_jobs()
    if jobs is not None:
        jobs.stop()
    stopped = get_dependencies().mind_map_usecase.stop_session()
    return success_response({"stopped": stopped})


@mind_map_bp.route('/session/tick', methods=['POST'])
@require_auth
def tick_session():
    """Request Body (JSON): {"ticks": int}"""
    try:
        ticks = _optional_int(_json(), 'ticks') or 1
        return _session_response(get_dependencies().mind_map_usecase.step(ticks))
    except SimulationStoppedError as e:
        return error_response(SIMULATION_STOPPED, str(e), 409)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("마인드맵 tick 진행 실패")
        return internal_error_response(e)


@mind_map_bp.route('/session/drag', methods=['POST'])
@require_auth
def drag_node():
    """Request Body (JSON): {"action": "start" | "move" | "end", "nodeId": str, "x": float, "y": float}"""
    try:
        data = _json()
        session = get_dependencies().mind_map_usecase.drag(
            data.get('action'),
            data.get('nodeId'),
            data.get('x'),
            data.get('y'),
        )
        jobs = get_simulation_jobs()
        if jobs is not None and data.get('action') == 'start':
            jobs.resume()
        return _session_response(session)
    except SimulationStoppedError as e:
        return error_response(SIMULATION_STOPPED, str(e), 409)
    except KeyError as e:
        return error_response(NOT_FOUND, f"알 수 없는 노드입니다: {e.args[0] if e.args else ''}", 404)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("마인드맵 드래그 처리 실패")
        return internal_error_response(e)


@mind_map_bp.route('/session/select', methods=['POST'])
@require_auth
def select_node():
    """Request Body (JSON): {"nodeId": str | null}"""
    try:
        detail = get_dependencies().mind_map_usecase.select(_json().get('nodeId'))
        return success_response(detail.to_dict() if detail else None)
    except SimulationStoppedError as e:
        return error_response(SIMULATION_STOPPED, str(e), 409)
    except KeyError as e:
        return error_response(NOT_FOUND, f"알 수 없는 노드입니다: {e.args[0] if e.args else ''}", 404)
    except Exception as e:
        logger.exception("마인드맵 노드 선택 실패")
        return internal_error_response(e)


@mind_map_bp.route('/session/hover', methods=['POST'])
@require_auth
def hover_node():
    """Request Body (JSON): {"nodeId": str | null, "x": float, "y": float} (화면 좌표)"""
    try:
        data = _json()
        tooltip = get_dependencies().mind_map_usecase.hover(
            data.get('nodeId'),
            data.get('x', 0.0),
            data.get('y', 0.0),
        )
        return success_response(tooltip.to_dict() if tooltip else None)
    except SimulationStoppedError as e:
        return error_response(SIMULATION_STOPPED, str(e), 409)
    except KeyError as e:
        return error_response(NOT_FOUND, f"알 수 없는 노드입니다: {e.args[0] if e.args else ''}", 404)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("마인드맵 호버 처리 실패")
        return internal_error_response(e)


@mind_map_bp.route('/session/zoom', methods=['POST'])
@require_auth
def zoom():
    """Request Body (JSON): {"factor": float, "centerX": float, "centerY": float, "dx": float, "dy": float, "reset": bool}"""
    try:
        data = _json()
        transform = get_dependencies().mind_map_usecase.zoom(
            factor=_optional_float(data, 'factor'),
            center_x=data.get('centerX', 0.0),
            center_y=data.get('centerY', 0.0),
            dx=data.get('dx', 0.0),
            dy=data.get('dy', 0.0),
            reset=bool(data.get('reset', False)),
        )
        return success_response(transform.to_dict())
    except SimulationStoppedError as e:
        return error_response(SIMULATION_STOPPED, str(e), 409)
    except (TypeError, ValueError) as e:
        return error_response(VALIDATION_ERROR, str(e), 400)
    except Exception as e:
        logger.exception("마인드맵 줌 처리 실패")
        return internal_error_response(e)
