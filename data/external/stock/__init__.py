"""Stock search/price lookup"""
from data.external.stock.stock_repository_impl import StockRepositoryImpl

__all__ = ['StockRepositoryImpl']
