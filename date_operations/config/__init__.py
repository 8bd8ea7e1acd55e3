"""
Configuration loading for date operations.
"""

from date_operations.config.manager import ConfigManager, describe

__all__ = ["ConfigManager", "describe"]
