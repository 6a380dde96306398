import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from jose import jwt, JWTError, ExpiredSignatureError
from fastapi.security import OAuth2PasswordBearer
from fastapi import Depends, HTTPException, status

from database import OwnerORM
from database.db import get_db
from repositories.access_token_repository import AccessTokenRepository
from sqlalchemy.orm import Session
from config import settings
from core.enums import Role

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token")


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    db: Optional[Session] = None
) -> str:
    """Create a JWT access token including standard claims (sub, jti, iat, exp, iss, aud).

    `data` should include an identifier under the "sub" key (owner id).
    When `db` is given the token is recorded (flush only, the caller commits)
    so it can later be revoked; tokens without a record are rejected by
    `get_current_user_dep`.
    """
    to_encode = data.copy()
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_minutes))
    if "sub" not in to_encode:
        raise ValueError("`data` must include `sub` (subject / owner id)")
    jti = to_encode.get("jti") or str(uuid4())
    to_encode.update({
        "jti": jti,
        "exp": expire,
        "iat": now,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience
    })
    if db is not None:
        AccessTokenRepository(db).record(jti=jti, owner_id=str(to_encode["sub"]), expires_at=expire)
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token.

    Validates signature, expiration, issuer and audience. Raises HTTPException(401)
    for any invalid token state.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
        return payload
    except ExpiredSignatureError:
        logger.info("Token expirado")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expirado")
    except JWTError as e:
        logger.info(f"Token inválido o claim mismatch: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido o expirado")


def get_current_token(token: str = Depends(oauth2_scheme)) -> dict:
    """Claims of the bearer token of the current request (used by logout)."""
    payload = decode_token(token)
    if not payload.get("sub") or not payload.get("jti"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido: claims faltantes")
    return payload


def get_current_user_dep(payload: dict = Depends(get_current_token), db: Session = Depends(get_db)) -> OwnerORM:
    """Resolve the authenticated owner.

    The token must be recorded and not revoked, and the account must be enabled.
    """
    token_row = AccessTokenRepository(db).get_active(payload["jti"])
    if token_row is None:
        logger.info(f"Token {payload['jti']} revocado o desconocido")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token revocado o inválido")
    user = db.get(OwnerORM, str(payload["sub"]))
    if not user or token_row.owner_id != user.id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuario no encontrado")
    if user.status != "enabled":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Cuenta deshabilitada")
    return user


def require_roles(*allowed_roles: Role):
    """Dependency factory that ensures the current user has one of the allowed roles.

    Usage in route: current_user = Depends(require_roles(Role.superadmin))
    """

    def _dependency(current_user: OwnerORM = Depends(get_current_user_dep)):
        if Role(current_user.role) not in allowed_roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Permisos insuficientes")
        return current_user

    return _dependency
