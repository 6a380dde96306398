"""módulo de base de datos con manejo mejorado de errores y configuración centralizada."""
from typing import Optional, Generator
import hashlib
import hmac
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

# import ORM classes and Base from models.py
from .models import (
    Base,
    OwnerORM,
    PetORM,
    MedicalConsultationORM,
    AccessTokenORM,
)

#import configuration
from config import settings

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    """Argumentos de conexión según el motor configurado."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {"connect_timeout": 30}


#engine / session con configuración centralizada
engine = create_engine(
    settings.database_url,
    echo=settings.debug_mode,
    future=True,
    pool_pre_ping=True,  #verifica conexiones antes de usarlas
    connect_args=_connect_args(settings.database_url),
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """dependencia de FastAPI que provee una sesión con manejo robusto de errores.

    Yields:
        Session: Sesión de SQLAlchemy

    Nota:
        - Hace rollback automático si hay excepciones SQLAlchemy
        - Cierra la sesión de forma segura
        - No captura HTTPException (son errores esperados de negocio)
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Error de base de datos en sesión: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    """Crear tablas ORM en la base de datos.

    Raises:
        SQLAlchemyError: Si hay error al crear las tablas
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tablas de base de datos creadas/verificadas exitosamente")
    except SQLAlchemyError as e:
        logger.error(f"Error al crear tablas: {e}", exc_info=True)
        raise


def get_database_url() -> str:
    """Obtiene la URL de la base de datos (sin credenciales sensibles)."""
    url = str(engine.url)
    #ocultar credenciales si existen
    if '@' in url:
        parts = url.split('@')
        return f"***@{parts[1]}"
    return url


def hash_password(password: str) -> tuple[str, str]:
    """Genera salt y hash (ambos hex) usando PBKDF2-HMAC-SHA256."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)
    return salt.hex(), dk.hex()


def verify_password(salt_hex: str, hash_hex: str, password: str) -> bool:
    """Verifica que password coincida con salt+hash almacenados."""
    salt = bytes.fromhex(salt_hex)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)
    return hmac.compare_digest(dk.hex(), hash_hex)


def set_audit_fields(obj, user_id: Optional[str], creating: bool = True) -> None:
    """helper para setear campos de auditoría en una instancia ORM

    Args:
        obj: instancia ORM a modificar
        user_id: ID del usuario responsable (puede ser None)
        creating: Si True setea campos de creación, si False solo actualización
    """
    from utils.datetime_utils import get_local_now
    now = get_local_now().replace(tzinfo=None)
    if creating:
        if hasattr(obj, "created_by"):
            obj.created_by = user_id
        if hasattr(obj, "created_at") and getattr(obj, "created_at", None) is None:
            obj.created_at = now
    # siempre setear actualización
    if hasattr(obj, "updated_by"):
        obj.updated_by = user_id
    if hasattr(obj, "updated_at"):
        obj.updated_at = now


def disable_record(obj, user_id: Optional[str]) -> bool:
    """
    marca un objeto como deshabilitado (status = disabled)

    Args:
        obj: instancia ORM con columna status
        user_id: ID del usuario que realiza la deshabilitación

    Returns:
        True si el objeto cambió de estado, False si ya estaba deshabilitado
    """
    from utils.datetime_utils import get_local_now
    if obj.status == "disabled":
        return False
    obj.status = "disabled"
    obj.disabled_at = get_local_now().replace(tzinfo=None)
    obj.disabled_by = user_id
    set_audit_fields(obj, user_id, creating=False)
    return True


def enable_record(obj, user_id: Optional[str]) -> None:
    """vuelve a habilitar un objeto previamente deshabilitado

    Args:
        obj: instancia ORM con columna status
        user_id: ID del usuario que realiza la habilitación
    """
    obj.status = "enabled"
    obj.disabled_at = None
    obj.disabled_by = None
    set_audit_fields(obj, user_id, creating=False)
