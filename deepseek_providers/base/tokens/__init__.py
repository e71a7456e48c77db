"""Token usage helpers package."""

from .extraction import extract_usage

__all__ = ["extract_usage"]
