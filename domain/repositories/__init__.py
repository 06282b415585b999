"""Domain Repository Interfaces"""
from domain.repositories.portfolio_repository import PortfolioRepository
from domain.repositories.exchange_rate_repository import (
    ExchangeRateRepository,
    ExchangeRateStateRepository,
)
from domain.repositories.user_repository import UserRepository
from domain.repositories.stock_repository import StockRepository

__all__ = [
    'PortfolioRepository',
    'ExchangeRateRepository',
    'ExchangeRateStateRepository',
    'UserRepository',
    'StockRepository',
]
