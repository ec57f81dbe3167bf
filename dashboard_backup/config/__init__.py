"""
Configuration loading for dashboard backup operations.
"""

from .manager import ConfigurationManager

__all__ = ["ConfigurationManager"]
