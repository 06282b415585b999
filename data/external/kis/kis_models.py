# -*- coding: utf-8 -*-
"""KIS API Data Models"""
from dataclasses import dataclass, fields


def _from_output(cls, output: dict):
    """응답 output에서 모델에 정의된 필드만 추출 (없는 필드는 빈 문자열)"""
    names = {f.name for f in fields(cls)}
    return cls(**{name: str(output.get(name, '') or '') for name in names})


@dataclass
class KisSearchItem:
    """종목 검색 응답 항목"""
    pdno: str         # 종목코드
    prdt_name: str    # 종목명

    @classmethod
    def from_output(cls, output: dict) -> 'KisSearchItem':
        return _from_output(cls, output)


@dataclass
class KisPriceOutput:
    """국내주식 현재가 응답 (FHKST01010100)"""
    stck_prpr: str    # 현재가
    prdy_vrss: str    # 전일 대비
    prdy_ctrt: str    # 전일 대비율
    acml_vol: str     # 누적 거래량
    prdt_name: str    # 종목명 (응답에 없을 수 있음)

    @classmethod
    def from_output(cls, output: dict) -> 'KisPriceOutput':
        return _from_output(cls, output)
