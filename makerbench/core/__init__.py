"""
Core Module - Configuration and dependency injection.
"""

from makerbench.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
