"""
Domain package for SQLHelper.

Exports the dialect catalogue and the connection parameter model. Keep this
package focused on data definitions; no I/O happens here.
"""

from sqlhelper.domain.dialect import Dialect, format_url
from sqlhelper.domain.models import (
    MAX_POOL_SIZE,
    STATEMENT_CACHE_PROPERTIES,
    ConnectionParameters,
)

__all__ = [
    "ConnectionParameters",
    "Dialect",
    "MAX_POOL_SIZE",
    "STATEMENT_CACHE_PROPERTIES",
    "format_url",
]
