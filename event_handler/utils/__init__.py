"""
Utility helpers for Event Handler.
"""

from .decorators import listens_to

__all__ = ["listens_to"]
