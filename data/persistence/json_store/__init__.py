"""JSON Key-Value Store Repository Implementations"""
from data.persistence.json_store.portfolio_repository_impl import JsonPortfolioRepositoryImpl
from data.persistence.json_store.exchange_rate_state_repository_impl import JsonExchangeRateStateRepositoryImpl

__all__ = [
    'JsonPortfolioRepositoryImpl',
    'JsonExchangeRateStateRepositoryImpl',
]
