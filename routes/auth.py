"""
Identity routes: registration, login and logout.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
import logging

from models.owners import AuthResponse, LoginRequest, RegisterRequest
from models.common import MessageResponse, create_message_response
from core.exceptions import AppException
from services.owner_service import OwnerService
from dependencies import get_owner_service
from auth import get_current_token, get_current_user_dep
from routes.common import handle_service_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    service: OwnerService = Depends(get_owner_service),
):
    """
    Public registration. The new account is always a client.
    """
    try:
        return service.register(data)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error registering owner: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar usuario"
        )


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    service: OwnerService = Depends(get_owner_service),
):
    """
    Login with JSON `{email, password}`; returns `{token, owner}`.
    """
    try:
        return service.login(data)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error on login: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al iniciar sesión"
        )


@router.post("/token")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: OwnerService = Depends(get_owner_service),
):
    """
    OAuth2 compatible token endpoint (form-data, username = email).
    Used by Swagger UI and OAuth2 clients.
    """
    try:
        result = service.login(LoginRequest(email=form_data.username, password=form_data.password))
    except AppException as e:
        raise handle_service_exception(e)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Las credenciales son incorrectas")
    return {"access_token": result.token, "token_type": "bearer"}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    payload: dict = Depends(get_current_token),
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """Revoke the bearer token used for this request."""
    try:
        service.logout(current_user, payload["jti"])
        return create_message_response("Sesión cerrada")
    except AppException as e:
        raise handle_service_exception(e)
