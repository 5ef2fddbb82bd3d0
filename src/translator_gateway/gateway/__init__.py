"""
Gateway module for Translator Gateway.
Wraps the upstream translation service behind a small async interface.
"""

from .base import BaseTranslatorGateway, UpstreamError, dictionary_target
from .azure import AzureTranslatorGateway

__all__ = [
    "BaseTranslatorGateway",
    "UpstreamError",
    "dictionary_target",
    "AzureTranslatorGateway",
]
