"""
Configuration for MockPrep
"""

from mockprep.config.settings import FallbackPolicy, Settings, get_settings

__all__ = ["FallbackPolicy", "Settings", "get_settings"]
