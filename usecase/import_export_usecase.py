"""Import/Export Usecase - 포트폴리오 CSV/JSON 내보내기 및 가져오기"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from data.serialization.csv_codec import export_to_csv, import_from_csv
from data.serialization.json_codec import export_to_json, import_from_json
from domain.entities.holding import Holding
from domain.exceptions import ImportFormatError
from usecase.portfolio_usecase import PortfolioUsecase

logger = logging.getLogger(__name__)

MODE_OVERWRITE = 'overwrite'
MODE_MERGE = 'merge'
FORMAT_CSV = 'csv'
FORMAT_JSON = 'json'

CONTENT_TYPES = {
    FORMAT_CSV: 'text/csv; charset=utf-8',
    FORMAT_JSON: 'application/json; charset=utf-8',
}


@dataclass
class ExportFile:
    filename: str
    content: str
    content_type: str


@dataclass
class ImportResult:
    """가져오기 결과"""
    mode: str
    imported: int
    added: int
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'mode': self.mode,
            'imported': self.imported,
            'added': self.added,
            'errors': list(self.errors),
        }


def export_filename(fmt: str, today: Optional[date] = None) -> str:
    """portfolio_YYYY-MM-DD.csv / .json"""
    today = today or date.today()
    return f"portfolio_{today.isoformat()}.{fmt}"


class ImportExportUsecase:
    """Import/Export Usecase"""

    def __init__(self, portfolio_usecase: PortfolioUsecase):
        self.portfolio_usecase = portfolio_usecase

    # === 내보내기 ===

    def export_csv(self) -> str:
        return export_to_csv(self.portfolio_usecase.get_holdings())

    def export_json(self) -> str:
        return export_to_json(self.portfolio_usecase.get_holdings())

    def export_file(self, fmt: str = FORMAT_CSV, today: Optional[date] = None) -> ExportFile:
        """
        Raises:
            ValueError: 지원하지 않는 형식
        """
        fmt = (fmt or FORMAT_CSV).lower()
        if fmt == FORMAT_CSV:
            content = self.export_csv()
        elif fmt == FORMAT_JSON:
            content = self.export_json()
        else:
            raise ValueError(f"지원하지 않는 형식입니다: {fmt}")
        return ExportFile(export_filename(fmt, today), content, CONTENT_TYPES[fmt])

    # === 가져오기 ===

    def _apply(self, holdings: List[Holding], mode: str, errors: List[str]) -> ImportResult:
        if mode not in (MODE_OVERWRITE, MODE_MERGE):
            raise ValueError(f"알 수 없는 가져오기 모드입니다: {mode}")
        if not holdings:
            raise ImportFormatError('가져올 수 있는 종목이 없습니다.')

        if mode == MODE_OVERWRITE:
            self.portfolio_usecase.replace_holdings(holdings)
            added = len(holdings)
        else:
            added = len(self.portfolio_usecase.merge_holdings(holdings))

        logger.info(f"포트폴리오 가져오기 ({mode}): {len(holdings)}개 중 {added}개 반영")
        return ImportResult(mode=mode, imported=len(holdings), added=added, errors=errors)

    def import_csv(self, content: str, mode: str = MODE_OVERWRITE) -> ImportResult:
        """
        Raises:
            ImportFormatError: 형식 오류 또는 유효한 종목 없음
            ValueError: 알 수 없는 모드
        """
        result = import_from_csv(content, self.portfolio_usecase.get_rate())
        return self._apply(result.holdings, mode, result.errors)

    def import_json(self, content: str, mode: str = MODE_OVERWRITE) -> ImportResult:
        errors: List[str] = []
        holdings = import_from_json(content, self.portfolio_usecase.get_rate(), errors)
        return self._apply(holdings, mode, errors)

    def import_file(self, content: str, fmt: str, mode: str = MODE_OVERWRITE) -> ImportResult:
        fmt = (fmt or '').lower()
        if fmt == FORMAT_CSV:
            return self.import_csv(content, mode)
        if fmt == FORMAT_JSON:
            return self.import_json(content, mode)
        raise ValueError(f"지원하지 않는 형식입니다: {fmt}")
