"""
Infrastructure package for SQLHelper.

Centralizes the driver and pool collaborators. Keep this layer focused on
I/O and resource management, decoupled from the façade.
"""

from sqlhelper.infrastructure.db_factory import (
    PoolConfig,
    create_pool,
    open_connection,
    register_driver,
)

__all__ = [
    "PoolConfig",
    "create_pool",
    "open_connection",
    "register_driver",
]
