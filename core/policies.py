"""
Políticas de autorización.

Funciones puras: reciben el rol y el id del actor junto con los datos mínimos
del recurso y devuelven True/False. No hacen I/O; los servicios resuelven
antes lo que haga falta (p. ej. si existe una consulta que vincula a un
veterinario con una mascota).

Cada función recorre los tres roles de forma explícita y rechaza cualquier
valor fuera de ``Role``.
"""

from typing import Optional

from core.enums import Role
from core.exceptions import ForbiddenException


def _as_role(role) -> Role:
    """Convierte el rol almacenado a ``Role``; un valor desconocido es un error."""
    try:
        return Role(role)
    except ValueError:
        raise ValueError(f"Rol desconocido: {role!r}")


# ==================== Mascotas ====================

def can_list_pets(role) -> bool:
    """Todos los roles pueden listar; el filtrado lo hace ``pet_list_scope``."""
    role = _as_role(role)
    if role is Role.client:
        return True
    if role is Role.veterinarian:
        return True
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def pet_list_scope(role) -> str:
    """
    Indica qué subconjunto de mascotas ve un rol en los listados.

    Returns:
        "own" (mascotas propias), "linked" (vinculadas por consulta) o "all"
    """
    role = _as_role(role)
    if role is Role.client:
        return "own"
    if role is Role.veterinarian:
        return "linked"
    if role is Role.superadmin:
        return "all"
    raise ValueError(f"Rol no contemplado: {role}")


def can_view_pet(role, actor_id: str, pet_owner_id: str, linked_by_consultation: bool = False) -> bool:
    role = _as_role(role)
    if role is Role.client:
        return actor_id == pet_owner_id
    if role is Role.veterinarian:
        return linked_by_consultation
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def can_create_pet(role, actor_id: str, target_owner_id: Optional[str] = None) -> bool:
    """
    Un cliente solo crea mascotas para sí mismo; el superadmin para cualquiera.

    ``target_owner_id`` None significa "para el propio actor".
    """
    role = _as_role(role)
    if role is Role.client:
        return target_owner_id is None or target_owner_id == actor_id
    if role is Role.veterinarian:
        return False
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def can_update_pet(role, actor_id: str, pet_owner_id: str) -> bool:
    role = _as_role(role)
    if role is Role.client:
        return actor_id == pet_owner_id
    if role is Role.veterinarian:
        return False
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def can_disable_pet(role, actor_id: str, pet_owner_id: str) -> bool:
    role = _as_role(role)
    if role is Role.client:
        return actor_id == pet_owner_id
    if role is Role.veterinarian:
        return False
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


# ==================== Consultas médicas ====================

def consultation_list_scope(role) -> str:
    """
    Filtro de listados de consultas por rol.

    Returns:
        "client" (consultas como cliente), "veterinarian" (como veterinario) o "all"
    """
    role = _as_role(role)
    if role is Role.client:
        return "client"
    if role is Role.veterinarian:
        return "veterinarian"
    if role is Role.superadmin:
        return "all"
    raise ValueError(f"Rol no contemplado: {role}")


def can_view_consultation(role, actor_id: str, client_id: str, veterinarian_id: str) -> bool:
    role = _as_role(role)
    if role is Role.client:
        return actor_id == client_id
    if role is Role.veterinarian:
        return actor_id == veterinarian_id
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def can_create_consultation(role) -> bool:
    """La propiedad de la mascota la comprueba ``can_schedule_for_pet``."""
    role = _as_role(role)
    if role is Role.client:
        return True
    if role is Role.veterinarian:
        return False
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def can_schedule_for_pet(role, actor_id: str, pet_owner_id: str) -> bool:
    role = _as_role(role)
    if role is Role.client:
        return actor_id == pet_owner_id
    if role is Role.veterinarian:
        return False
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def can_update_consultation_status(role, actor_id: Optional[str] = None, veterinarian_id: Optional[str] = None) -> bool:
    """Los clientes nunca cambian el estado, aunque la consulta sea suya."""
    role = _as_role(role)
    if role is Role.client:
        return False
    if role is Role.veterinarian:
        return actor_id is not None and actor_id == veterinarian_id
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


# ==================== Cuentas ====================

def can_manage_accounts(role) -> bool:
    role = _as_role(role)
    if role is Role.client:
        return False
    if role is Role.veterinarian:
        return False
    if role is Role.superadmin:
        return True
    raise ValueError(f"Rol no contemplado: {role}")


def ensure(allowed: bool, message: str = "No autorizado para realizar esta acción") -> None:
    """
    Convierte la decisión de una política en ``ForbiddenException``.

    Raises:
        ForbiddenException: Si ``allowed`` es False
    """
    if not allowed:
        raise ForbiddenException(message=message)
