"""External Exchange Rate Providers"""
from data.external.exchange_rate.exchange_rate_client import ExchangeRateClient
from data.external.exchange_rate.exchange_rate_repository_impl import ExchangeRateRepositoryImpl, CacheInfo

__all__ = [
    'ExchangeRateClient',
    'ExchangeRateRepositoryImpl',
    'CacheInfo',
]
