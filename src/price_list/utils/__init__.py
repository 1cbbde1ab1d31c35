"""Utility helpers."""

from .errors import ItemsLoadError, ViewStateError
from .logging import get_logger

__all__ = ["ItemsLoadError", "ViewStateError", "get_logger"]
