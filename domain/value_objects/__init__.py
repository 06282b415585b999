"""Value Objects"""
from domain.value_objects.view_mode import ViewMode
from domain.value_objects.node_type import NodeType
from domain.value_objects.currency import Currency, Market
from domain.value_objects.mind_map_node import MindMapNode
from domain.value_objects.valuation import HoldingValuation, AggregateValuation
from domain.value_objects.simulation_phase import SimulationPhase
from domain.value_objects.node_position import NodePosition
from domain.value_objects.node_detail import NodeDetail, Tooltip
from domain.value_objects.stock_quote import QuoteSource, StockQuote, StockSearchResult
from domain.value_objects.zoom_transform import ZoomTransform

__all__ = [
    'ViewMode',
    'NodeType',
    'Currency',
    'Market',
    'MindMapNode',
    'HoldingValuation',
    'AggregateValuation',
    'SimulationPhase',
    'NodePosition',
    'NodeDetail',
    'Tooltip',
    'QuoteSource',
    'StockQuote',
    'StockSearchResult',
    'ZoomTransform',
]
