"""Utility modules for ubbparse.

Provides:
- logger: get_logger for namespaced logging
"""

from ubbparse.utils.logger import get_logger

__all__ = ["get_logger"]
