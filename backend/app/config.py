"""
Application configuration.

Re-exports core.config so backend modules can import settings relative to
the app package:
    from ..config import get_settings
"""

from core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
