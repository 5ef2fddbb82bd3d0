"""
Translator Gateway: a validating JSON proxy in front of the Azure Translator API.
"""

__version__ = "1.0.0"
