"""Scene container constants.

Every multi-byte field in a scene file is little-endian.
"""

from __future__ import annotations

# Leading file marker and trailing marker after every object record
MAGIC_NUMBER = 0xDEADBEEF

# Newest container version this build can write and read
CURRENT_VERSION = 1

BYTE_ORDER = "<"

__all__ = ["BYTE_ORDER", "CURRENT_VERSION", "MAGIC_NUMBER"]
