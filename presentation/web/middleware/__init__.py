"""Web Middleware"""
from presentation.web.middleware.auth_middleware import require_auth, get_bearer_token

__all__ = ['require_auth', 'get_bearer_token']
