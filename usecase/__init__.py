"""Usecase Layer"""
from usecase.portfolio_usecase import PortfolioUsecase, PriceRefreshResult
from usecase.mind_map_usecase import MindMapUsecase, MindMapSession
from usecase.stock_usecase import StockUsecase
from usecase.auth_usecase import AuthUsecase
from usecase.import_export_usecase import ImportExportUsecase, ImportResult

__all__ = [
    'PortfolioUsecase',
    'PriceRefreshResult',
    'MindMapUsecase',
    'MindMapSession',
    'StockUsecase',
    'AuthUsecase',
    'ImportExportUsecase',
    'ImportResult',
]
