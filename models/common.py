"""
Modelos comunes de respuesta para la API.

Estos modelos proporcionan respuestas consistentes y estandarizadas
para todos los endpoints de la API
"""
from typing import Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime


class MessageResponse(BaseModel):
    """Respuesta estándar con solo un mensaje."""
    message: str = Field(..., description="Mensaje descriptivo de la operación")


class ErrorResponse(BaseModel):
    """Respuesta estándar de error."""
    success: bool = Field(False, description="Indica que la operación falló")
    error: str = Field(..., description="Tipo de error")
    message: str = Field(..., description="Mensaje descriptivo del error")
    details: Optional[dict] = Field(None, description="Detalles adicionales del error")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Timestamp de la respuesta")


class HealthCheckResponse(BaseModel):
    """Respuesta del health check."""
    status: str = Field(..., description="Estado general (healthy/unhealthy)")
    service: str = Field(..., description="Nombre del servicio")
    version: str = Field(..., description="Versión de la API")
    database: str = Field(..., description="Estado de la base de datos")
    environment: str = Field(..., description="Entorno (production/development)")
    timestamp: datetime = Field(default_factory=datetime.utcnow)


def create_message_response(message: str, **extra: Any) -> dict:
    """Helper para respuestas `{message, ...}`."""
    return {"message": message, **extra}


def create_error_response(error: str, message: str, details: Optional[dict] = None) -> dict:
    """Helper para crear respuestas de error."""
    return ErrorResponse(error=error, message=message, details=details).model_dump(mode="json")
