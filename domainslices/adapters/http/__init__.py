"""HTTP adapters for reading the application API."""

from .client import HttpxJsonSource

__all__ = ["HttpxJsonSource"]
