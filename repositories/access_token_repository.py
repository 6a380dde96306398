"""
Repositorio de tokens de acceso emitidos (para revocación).
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
import logging

from repositories.base_repository import BaseRepository
from database.models import AccessTokenORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class AccessTokenRepository(BaseRepository[AccessTokenORM]):
    """Repositorio para la entidad AccessToken."""

    resource_name = "Token"

    def __init__(self, db: Session):
        super().__init__(db, AccessTokenORM)

    def record(self, jti: str, owner_id: str, expires_at: datetime) -> AccessTokenORM:
        """Registra un token recién emitido (flush, sin commit)."""
        token = AccessTokenORM(jti=jti, owner_id=owner_id, expires_at=expires_at)
        try:
            self.db.add(token)
            self.db.flush()
            return token
        except Exception as e:
            logger.error(f"Error recording token for owner {owner_id}: {e}")
            self.db.rollback()
            raise DatabaseException("Error al registrar el token")

    def get_active(self, jti: str, now: Optional[datetime] = None) -> Optional[AccessTokenORM]:
        """
        Devuelve el token si existe, no está revocado y no ha expirado.
        """
        now = now or datetime.utcnow()
        token = self.get_by_id(jti)
        if token is None or token.revoked_at is not None or token.expires_at <= now:
            return None
        return token

    def revoke(self, jti: str) -> bool:
        """
        Revoca un token.

        Returns:
            True si el token existía y no estaba revocado
        """
        token = self.get_by_id(jti)
        if token is None or token.revoked_at is not None:
            return False
        try:
            token.revoked_at = datetime.utcnow()
            self.db.flush()
            return True
        except Exception as e:
            logger.error(f"Error revoking token {jti}: {e}")
            self.db.rollback()
            raise DatabaseException("Error al revocar el token")

    def revoke_all_for_owner(self, owner_id: str) -> int:
        """Revoca todos los tokens vigentes de una cuenta. Devuelve cuántos se revocaron."""
        try:
            now = datetime.utcnow()
            count = (
                self.db.query(AccessTokenORM)
                .filter(AccessTokenORM.owner_id == owner_id, AccessTokenORM.revoked_at.is_(None))
                .update({AccessTokenORM.revoked_at: now}, synchronize_session="fetch")
            )
            self.db.flush()
            return count
        except Exception as e:
            logger.error(f"Error revoking tokens of owner {owner_id}: {e}")
            self.db.rollback()
            raise DatabaseException("Error al revocar los tokens")
