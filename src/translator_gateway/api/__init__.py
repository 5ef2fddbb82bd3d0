"""
HTTP surface of Translator Gateway.
"""

from .routes import ENDPOINTS, router

__all__ = [
    "ENDPOINTS",
    "router",
]
