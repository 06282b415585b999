# -*- coding: utf-8 -*-
"""포트폴리오 JSON 내보내기/가져오기"""
import json
from datetime import datetime, timezone
from typing import List, Optional

from domain.entities.holding import Holding
from domain.exceptions import ImportFormatError
from data.serialization.holding_migration import CURRENT_SCHEMA_VERSION, load_holdings

EXPORT_FORMAT_VERSION = '2.0'


def export_to_json(holdings: List[Holding], exported_at: Optional[datetime] = None) -> str:
    """
    보유 종목을 JSON 문자열로 변환

    Returns:
        str: {"holdings": [...], "exportedAt": ISO8601, "version": "2.0"}
    """
    exported_at = exported_at or datetime.now(timezone.utc)
    payload = {
        'holdings': [h.to_dict() for h in holdings],
        'exportedAt': exported_at.isoformat(),
        'version': EXPORT_FORMAT_VERSION,
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def detect_json_version(payload: dict) -> int:
    """
    'version' 태그로 스키마 버전 판별 ('2.x' → 2, 태그 없음/그 외 → 1)
    """
    version = str(payload.get('version') or '')
    if version.split('.')[0] == str(CURRENT_SCHEMA_VERSION):
        return CURRENT_SCHEMA_VERSION
    return 1


def import_from_json(
    content: str,
    usd_to_krw_rate: Optional[float] = None,
    errors: Optional[List[str]] = None,
) -> List[Holding]:
    """
    JSON 문자열을 보유 종목으로 변환

    Args:
        content: JSON 문자열
        usd_to_krw_rate: v1 레코드 변환에 사용할 환율
        errors: 가격 정보가 없어 제외된 레코드 메시지를 받을 목록 (선택)

    Raises:
        ImportFormatError: JSON 파싱 실패 또는 holdings 배열이 없는 경우
    """
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"JSON 형식이 올바르지 않습니다: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get('holdings'), list):
        raise ImportFormatError('올바른 포트폴리오 파일이 아닙니다. (holdings 배열 없음)')

    return load_holdings(payload['holdings'], detect_json_version(payload), usd_to_krw_rate, errors)
