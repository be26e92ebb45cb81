"""Utilities module for common helper functions.

This module contains:
- Atomic file writes for repository metadata
"""

from gitlet.utils.fs import atomic_write, atomic_write_text

__all__ = [
    'atomic_write', 'atomic_write_text',
]
