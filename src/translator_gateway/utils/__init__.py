"""
Utility helpers for Translator Gateway.
"""

from .http_client import HTTPClient, create_http_client
from .sanitize import sanitize_input

__all__ = [
    "HTTPClient",
    "create_http_client",
    "sanitize_input",
]
