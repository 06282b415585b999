# -*- coding: utf-8 -*-
"""
포트폴리오 CSV 내보내기/가져오기

- UTF-8 + BOM (엑셀 한글 호환), 쉼표 구분, 필요한 경우에만 따옴표
- 헤더 컬럼 이름이 곧 형식 계약이며, 컬럼 구성으로 버전을 판별합니다.
  v2: 원화/달러 가격 컬럼, v1: 단일 가격 + (선택) 통화 컬럼
"""
import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from domain.entities.holding import DEFAULT_SECTOR, Holding
from domain.exceptions import ImportFormatError
from data.serialization.holding_migration import CURRENT_SCHEMA_VERSION, load_holdings

logger = logging.getLogger(__name__)

BOM = '\ufeff'
TAG_SEPARATOR = ';'

COL_SYMBOL = '종목코드'
COL_NAME = '종목명'
COL_QUANTITY = '보유수량'
COL_AVG_KRW = '평균매수가(원)'
COL_AVG_USD = '평균매수가(달러)'
COL_CUR_KRW = '현재가(원)'
COL_CUR_USD = '현재가(달러)'
COL_SECTOR = '섹터'
COL_TAGS = '태그'
# v1 전용
COL_AVG = '평균매수가'
COL_CUR = '현재가'
COL_CURRENCY = '통화'

CSV_HEADERS_V2 = [
    COL_SYMBOL, COL_NAME, COL_QUANTITY,
    COL_AVG_KRW, COL_AVG_USD, COL_CUR_KRW, COL_CUR_USD,
    COL_SECTOR, COL_TAGS,
]
CSV_HEADERS_V1 = [COL_SYMBOL, COL_NAME, COL_QUANTITY, COL_AVG, COL_CUR, COL_SECTOR, COL_TAGS]

REQUIRED_HEADERS_V2 = [COL_SYMBOL, COL_NAME, COL_QUANTITY, COL_AVG_KRW, COL_AVG_USD, COL_CUR_KRW, COL_CUR_USD]
REQUIRED_HEADERS_V1 = [COL_SYMBOL, COL_NAME, COL_QUANTITY, COL_AVG, COL_CUR]

_V2_NUMERIC = {
    COL_QUANTITY: 'quantity',
    COL_AVG_KRW: 'avgPriceKrw',
    COL_AVG_USD: 'avgPriceUsd',
    COL_CUR_KRW: 'currentPriceKrw',
    COL_CUR_USD: 'currentPriceUsd',
}
_V1_NUMERIC = {
    COL_QUANTITY: 'quantity',
    COL_AVG: 'avgPrice',
    COL_CUR: 'currentPrice',
}


@dataclass
class CsvImportResult:
    """CSV 가져오기 결과"""
    holdings: List[Holding]
    version: int
    errors: List[str] = field(default_factory=list)
    skipped: int = 0


def _format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def export_to_csv(holdings: List[Holding]) -> str:
    """
    보유 종목을 v2 CSV 문자열로 변환

    Returns:
        str: BOM으로 시작하는 CSV ('\\n' 줄바꿈)
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow(CSV_HEADERS_V2)
    for holding in holdings:
        writer.writerow([
            holding.symbol,
            holding.name,
            _format_number(holding.quantity),
            _format_number(holding.avg_price_krw),
            _format_number(holding.avg_price_usd),
            _format_number(holding.current_price_krw),
            _format_number(holding.current_price_usd),
            holding.sector or '',
            TAG_SEPARATOR.join(holding.tags),
        ])
    return BOM + buffer.getvalue().rstrip('\n')


def detect_csv_version(headers: List[str]) -> int:
    """
    헤더 컬럼 구성으로 형식 버전 판별

    Raises:
        ImportFormatError: 필수 컬럼 누락 (누락 컬럼 이름 포함)
    """
    header_set = set(headers)
    if header_set.issuperset(REQUIRED_HEADERS_V2):
        return CURRENT_SCHEMA_VERSION
    if header_set.issuperset(REQUIRED_HEADERS_V1):
        return 1

    # 이중 통화 컬럼이 하나라도 있으면 v2 기준으로 누락 컬럼 안내
    looks_like_v2 = bool(header_set & {COL_AVG_KRW, COL_AVG_USD, COL_CUR_KRW, COL_CUR_USD})
    required = REQUIRED_HEADERS_V2 if looks_like_v2 else REQUIRED_HEADERS_V1
    missing = [h for h in required if h not in header_set]
    raise ImportFormatError(f"필수 컬럼이 없습니다: {', '.join(missing)}")


def _parse_number(raw: str) -> float:
    raw = (raw or '').strip().replace(',', '')
    if not raw:
        return 0.0
    value = float(raw)
    if value != value or value in (float('inf'), float('-inf')):
        raise ValueError(raw)
    if value < 0:
        raise ValueError(raw)
    return value


def _row_to_record(row: Dict[str, str], version: int) -> dict:
    numeric = _V2_NUMERIC if version == CURRENT_SCHEMA_VERSION else _V1_NUMERIC
    record = {
        'symbol': (row.get(COL_SYMBOL) or '').strip(),
        'name': (row.get(COL_NAME) or '').strip(),
        'sector': (row.get(COL_SECTOR) or '').strip() or DEFAULT_SECTOR,
        'tags': [t.strip() for t in (row.get(COL_TAGS) or '').split(TAG_SEPARATOR) if t.strip()],
    }
    for column, key in numeric.items():
        try:
            record[key] = _parse_number(row.get(column))
        except ValueError:
            raise ValueError(f"{column} 값이 올바르지 않습니다: {row.get(column)!r}")
    if version == 1:
        record['currency'] = (row.get(COL_CURRENCY) or 'KRW').strip().upper() or 'KRW'
    return record


def import_from_csv(content: str, usd_to_krw_rate: Optional[float] = None) -> CsvImportResult:
    """
    CSV 문자열을 보유 종목으로 변환

    종목코드/종목명이 빈 행은 건너뛰고, 숫자 형식이 잘못된 행은 errors에 기록합니다.

    Args:
        content: CSV 문자열 (BOM 허용)
        usd_to_krw_rate: v1(단일 통화) 변환에 사용할 환율

    Returns:
        CsvImportResult

    Raises:
        ImportFormatError: 데이터 행이 없거나 필수 컬럼이 없는 경우
    """
    if content.startswith(BOM):
        content = content[len(BOM):]

    rows = [row for row in csv.reader(io.StringIO(content)) if any(cell.strip() for cell in row)]
    if len(rows) < 2:
        raise ImportFormatError('CSV 파일에 데이터가 없습니다.')

    headers = [h.strip() for h in rows[0]]
    version = detect_csv_version(headers)

    records: List[dict] = []
    errors: List[str] = []
    skipped = 0
    seen = set()
    for line_no, cells in enumerate(rows[1:], start=2):
        row = {header: cells[i].strip() if i < len(cells) else '' for i, header in enumerate(headers)}
        try:
            record = _row_to_record(row, version)
        except ValueError as e:
            errors.append(f"{line_no}행: {e}")
            continue

        if not record['symbol'] or not record['name']:
            skipped += 1
            continue
        if record['symbol'] in seen:
            errors.append(f"{line_no}행: 중복된 종목코드 {record['symbol']}")
            continue
        seen.add(record['symbol'])
        records.append(record)

    holdings = load_holdings(records, version, usd_to_krw_rate)
    if errors:
        logger.warning(f"CSV 가져오기 중 {len(errors)}개 행 제외: {errors}")
    return CsvImportResult(holdings=holdings, version=version, errors=errors, skipped=skipped)
