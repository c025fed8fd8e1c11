"""
Utility helpers for ogmo3.
"""

from .logging_config import ColoredFormatter, CSVFormatter, setup_logging

__all__ = ["ColoredFormatter", "CSVFormatter", "setup_logging"]
