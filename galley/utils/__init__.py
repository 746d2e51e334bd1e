"""
Shared utilities for GALLEY.

Common functionality used across contexts:
- Logging setup
- Configuration loading
- Rich-text helpers
- Timestamps
"""

from galley.utils.config import get_config, load_config
from galley.utils.timestamp import now

__all__ = ["get_config", "load_config", "now"]
