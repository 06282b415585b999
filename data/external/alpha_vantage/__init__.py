"""External Alpha Vantage API Integration"""
from data.external.alpha_vantage.alpha_vantage_client import AlphaVantageClient
from data.external.alpha_vantage.alpha_vantage_service import AlphaVantageService

__all__ = [
    'AlphaVantageClient',
    'AlphaVantageService',
]
