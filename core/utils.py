"""
Funciones de utilidad generales.
"""

from typing import Any
from enum import Enum as PyEnum


def enum_to_value(value: Any) -> Any:
    """
    Convierte un Enum a su valor, o devuelve el valor sin cambios.

    Args:
        value: Valor a convertir

    Returns:
        Enum.value si value es un Enum, de lo contrario el valor sin cambios
    """
    if isinstance(value, PyEnum):
        return value.value
    return value


def month_key(value) -> str:
    """Clave "YYYY-MM" de una fecha o datetime."""
    return f"{value.year:04d}-{value.month:02d}"


def iter_months(start, end):
    """
    Genera las claves "YYYY-MM" desde el mes de ``start`` hasta el de ``end``, ambos incluidos.
    """
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield f"{year:04d}-{month:02d}"
        month += 1
        if month > 12:
            month = 1
            year += 1
