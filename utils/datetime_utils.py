"""
Utilidades para manejo de fechas y zonas horarias.

Este módulo proporciona funciones para trabajar con fechas
en la zona horaria configurada de la aplicación. La base de datos
guarda fechas "naive" en hora local.
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from config import settings


def get_local_timezone() -> ZoneInfo:
    """Zona horaria configurada de la aplicación."""
    return ZoneInfo(settings.timezone)


def get_local_now() -> datetime:
    """
    Obtiene la fecha y hora actual en la zona horaria local configurada.

    Returns:
        datetime: Fecha y hora actual con zona horaria.
    """
    return datetime.now(get_local_timezone())


def get_local_today() -> date:
    return get_local_now().date()


def to_naive_local(dt: datetime) -> datetime:
    """
    Normaliza un datetime para guardarlo: si trae zona horaria se convierte
    a la hora local y se le quita la zona; si es naive se deja igual.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(get_local_timezone()).replace(tzinfo=None)


def one_year_before(value: date) -> date:
    """Misma fecha un año antes (29-feb pasa a 28-feb)."""
    return value - relativedelta(years=1)
