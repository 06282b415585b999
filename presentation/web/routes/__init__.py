from .health_routes import health_bp
from .auth_routes import auth_bp
from .stock_routes import stock_bp
from .exchange_rate_routes import exchange_rate_bp
from .portfolio_routes import portfolio_bp
from .mind_map_routes import mind_map_bp

__all__ = ['health_bp', 'auth_bp', 'stock_bp', 'exchange_rate_bp', 'portfolio_bp', 'mind_map_bp']
