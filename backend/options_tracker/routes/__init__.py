"""
API Routes Module
"""

from .trades import router as trades_router
from .web import router as web_router

__all__ = [
    'trades_router',
    'web_router'
]
