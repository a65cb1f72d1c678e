"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logger setup (Tier 1)
- Build event logging (Tier 2)
- Timestamps
- PDF inspection
"""

from vitae.utils.timestamp import format_elapsed, now, now_exact

__all__ = ["format_elapsed", "now", "now_exact"]
