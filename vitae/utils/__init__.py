"""
Shared utilities for vitae.

Common functionality used across contexts:
- Logger setup with provenance
- Language codes and input directory checks
- Timestamps for session directories
- PDF inspection
"""

from vitae.utils.languages import DEFAULT_LANG, get_lang, validate_directories
from vitae.utils.timestamp import now

__all__ = ["DEFAULT_LANG", "get_lang", "validate_directories", "now"]
