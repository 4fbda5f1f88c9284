"""Utility modules for WordTrail"""

from .logger import get_logger, preview_text, setup_logging

__all__ = [
    "get_logger",
    "preview_text",
    "setup_logging",
]
