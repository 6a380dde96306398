"""
Enumeraciones de dominio compartidas por todas las capas.

Los valores se guardan tal cual en la base de datos (columnas String).
"""

from enum import Enum


class Role(str, Enum):
    client = "client"
    veterinarian = "veterinarian"
    superadmin = "superadmin"


class RecordStatus(str, Enum):
    """Ciclo de vida de cuentas y mascotas (nunca se borran físicamente)."""
    enabled = "enabled"
    disabled = "disabled"


class Species(str, Enum):
    dog = "dog"
    cat = "cat"
    other = "other"


class PetSize(str, Enum):
    small = "small"
    medium = "medium"
    large = "large"


class ConsultationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


# Transiciones permitidas del diagrama de estados de una consulta médica
CONSULTATION_TRANSITIONS: dict[ConsultationStatus, frozenset[ConsultationStatus]] = {
    ConsultationStatus.PENDING: frozenset({ConsultationStatus.CONFIRMED, ConsultationStatus.CANCELLED}),
    ConsultationStatus.CONFIRMED: frozenset({ConsultationStatus.CANCELLED}),
    ConsultationStatus.CANCELLED: frozenset(),
}
