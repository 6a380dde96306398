"""
Utilidades de seguridad para validación de identificadores.
"""

from uuid import UUID


def is_valid_uuid(value: str) -> bool:
    """
    Indica si una cadena es un UUID válido.

    Los servicios tratan un ID mal formado igual que un ID inexistente.
    """
    try:
        UUID(str(value))
        return True
    except (ValueError, AttributeError, TypeError):
        return False
