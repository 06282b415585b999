"""External KIS (한국투자증권) API Integration"""
from data.external.kis.kis_models import KisPriceOutput, KisSearchItem
from data.external.kis.kis_client import KisClient
from data.external.kis.kis_service import KisService

__all__ = [
    'KisPriceOutput',
    'KisSearchItem',
    'KisClient',
    'KisService',
]
