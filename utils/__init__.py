"""
Utilidades del sistema.
"""
from .datetime_utils import (
    get_local_now,
    get_local_today,
    get_local_timezone,
    to_naive_local,
    one_year_before,
)

__all__ = ["get_local_now", "get_local_today", "get_local_timezone", "to_naive_local", "one_year_before"]
