# -*- coding: utf-8 -*-
"""
보유 종목 레코드 스키마 마이그레이션

- v1: 단일 통화 {avgPrice, currentPrice, currency}
- v2: 원화/달러 이중 통화 {avgPriceKrw, avgPriceUsd, currentPriceKrw, currentPriceUsd}

저장/가져오기 형식의 버전 태그로 시작 버전을 정한 뒤 MIGRATIONS 체인을 순서대로 적용합니다.
v1로 판별된 파일이라도 이중 통화 필드를 모두 가진 레코드는 그 값을 그대로 사용합니다.
"""
import logging
import math
from typing import Callable, Dict, List, Optional

from config.item import DEFAULT_USD_TO_KRW_RATE
from domain.entities.holding import DEFAULT_SECTOR, Holding
from domain.value_objects.currency import Currency

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 2

V1_PRICE_FIELDS = ('avgPrice', 'currentPrice')
V2_PRICE_FIELDS = ('avgPriceKrw', 'avgPriceUsd', 'currentPriceKrw', 'currentPriceUsd')


def _to_number(value) -> float:
    """숫자로 변환, 변환할 수 없으면 0"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def _has_fields(record: dict, fields) -> bool:
    return all(record.get(key) is not None for key in fields)


def _migrate_holding_v1_to_v2(record: dict, rate: float) -> dict:
    """
    Raises:
        ValueError: 이중 통화 필드도, 단일 통화 가격(avgPrice/currentPrice)도 없는 레코드
    """
    migrated = {
        key: value for key, value in record.items()
        if key not in ('avgPrice', 'currentPrice', 'currency')
    }
    if _has_fields(record, V2_PRICE_FIELDS):
        return migrated

    missing = [key for key in V1_PRICE_FIELDS if record.get(key) is None]
    if missing:
        raise ValueError(f"가격 필드가 없습니다: {', '.join(missing)}")

    currency = Currency.parse(record.get('currency'))
    avg = _to_number(record.get('avgPrice'))
    cur = _to_number(record.get('currentPrice'))

    if currency == Currency.USD:
        avg_krw, cur_krw = _round_half_up(avg * rate), _round_half_up(cur * rate)
        avg_usd, cur_usd = round(avg, 2), round(cur, 2)
    else:
        avg_krw, cur_krw = _round_half_up(avg), _round_half_up(cur)
        avg_usd, cur_usd = round(avg_krw / rate, 2), round(cur_krw / rate, 2)

    migrated.update({
        'avgPriceKrw': avg_krw,
        'avgPriceUsd': avg_usd,
        'currentPriceKrw': cur_krw,
        'currentPriceUsd': cur_usd,
    })
    return migrated


def migrate_holdings_v1_to_v2(
    records: List[dict],
    rate: float,
    errors: Optional[List[str]] = None,
) -> List[dict]:
    """가격 정보가 없는 레코드는 제외하고 errors에 기록"""
    migrated = []
    for index, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            continue
        try:
            migrated.append(_migrate_holding_v1_to_v2(record, rate))
        except ValueError as e:
            message = f"{index}번째 종목({record.get('symbol') or '-'}): {e}"
            logger.warning(f"v1 레코드 변환 제외 - {message}")
            if errors is not None:
                errors.append(message)
    return migrated


# from_version → 다음 버전으로 변환하는 함수
MIGRATIONS: Dict[int, Callable[..., List[dict]]] = {
    1: migrate_holdings_v1_to_v2,
}


def migrate_holding_records(
    records: List[dict],
    from_version: int,
    usd_to_krw_rate: Optional[float] = None,
    errors: Optional[List[str]] = None,
) -> List[dict]:
    """
    레코드를 현재 스키마 버전으로 변환

    Args:
        records: 보유 종목 레코드 (dict)
        from_version: 레코드의 스키마 버전
        usd_to_krw_rate: 단일 통화 → 이중 통화 변환에 쓸 환율 (없으면 1300)
        errors: 변환하지 못한 레코드 메시지를 받을 목록 (선택)

    Returns:
        List[dict]: 현재 버전 레코드

    Raises:
        ValueError: 알 수 없는 버전
    """
    rate = usd_to_krw_rate if usd_to_krw_rate and usd_to_krw_rate > 0 else DEFAULT_USD_TO_KRW_RATE
    if from_version > CURRENT_SCHEMA_VERSION or from_version < 1:
        raise ValueError(f"지원하지 않는 스키마 버전: {from_version}")

    version = from_version
    while version < CURRENT_SCHEMA_VERSION:
        records = MIGRATIONS[version](records, rate, errors)
        version += 1
    return records


def normalize_holding_record(record: dict) -> Optional[Holding]:
    """
    현재 버전 레코드를 Holding으로 변환 (숫자 필드는 0으로 보정)

    Returns:
        Optional[Holding]: symbol/name이 없거나 값이 유효하지 않으면 None
    """
    if not isinstance(record, dict):
        return None
    symbol = str(record.get('symbol') or '').strip()
    name = str(record.get('name') or '').strip()
    if not symbol or not name:
        return None

    tags = record.get('tags')
    day_change_rate = record.get('dayChangeRate')
    try:
        return Holding(
            symbol=symbol,
            name=name,
            quantity=_to_number(record.get('quantity')),
            avg_price_krw=_to_number(record.get('avgPriceKrw')),
            avg_price_usd=_to_number(record.get('avgPriceUsd')),
            current_price_krw=_to_number(record.get('currentPriceKrw')),
            current_price_usd=_to_number(record.get('currentPriceUsd')),
            sector=str(record.get('sector') or DEFAULT_SECTOR),
            tags=tags if isinstance(tags, list) else [],
            day_change_rate=day_change_rate if isinstance(day_change_rate, (int, float)) else None,
        )
    except ValueError as e:
        logger.warning(f"유효하지 않은 종목 레코드 제외 ({symbol}): {e}")
        return None


def load_holdings(
    records: List[dict],
    from_version: int,
    usd_to_krw_rate: Optional[float] = None,
    errors: Optional[List[str]] = None,
) -> List[Holding]:
    """마이그레이션 + 정규화 (유효하지 않은 레코드, 중복 symbol은 제외)"""
    holdings: List[Holding] = []
    seen = set()
    for record in migrate_holding_records(records or [], from_version, usd_to_krw_rate, errors):
        holding = normalize_holding_record(record)
        if holding is None or holding.symbol in seen:
            continue
        seen.add(holding.symbol)
        holdings.append(holding)
    return holdings
