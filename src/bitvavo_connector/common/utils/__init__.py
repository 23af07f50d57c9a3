"""
Utilities Module - Shared Helper Functions
===========================================

- Safe extraction of typed values from raw JSON
- Date/time utilities
"""

from bitvavo_connector.common.utils.date_utils import (
    from_unix_ms,
    to_unix_ms,
    utc_now,
)
from bitvavo_connector.common.utils.safe_access import (
    safe_float,
    safe_integer,
    safe_string,
    safe_value,
)

__all__ = [
    # Safe extraction
    "safe_value",
    "safe_string",
    "safe_float",
    "safe_integer",
    # Date utilities
    "to_unix_ms",
    "from_unix_ms",
    "utc_now",
]
