"""
Shared utilities for atsresume.

Common functionality used across contexts:
- Logger configuration
- Timestamps
"""

from atsresume.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact"]
