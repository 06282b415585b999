"""Domain Entities"""
from domain.entities.holding import Holding
from domain.entities.portfolio import Portfolio
from domain.entities.user import User
from domain.entities.exchange_rate_state import ExchangeRateState

__all__ = ['Holding', 'Portfolio', 'User', 'ExchangeRateState']
