from pydantic import BaseModel, BeforeValidator, Field, model_validator
from typing import Annotated, Optional, List
from datetime import datetime

from core.enums import Role, RecordStatus
from models.pets import Pet

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


Email = Annotated[
    str,
    BeforeValidator(_normalize_email),
    Field(max_length=255, pattern=EMAIL_PATTERN),
]


class RegisterRequest(BaseModel):
    """ Modelo para registro público de dueños.
    El rol se establece automáticamente como "client" en el servidor.
    Para crear veterinarios o superadmins, utilice el endpoint /users.
    """
    name: str = Field(..., min_length=1, max_length=255)
    email: Email
    password: str = Field(..., min_length=8)
    password_confirmation: str
    address: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)

    @model_validator(mode="after")
    def check_passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("La confirmación de la contraseña no coincide")
        return self


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class Owner(BaseModel):
    id: str
    name: str
    email: str
    address: str
    phone: str
    role: Role
    status: RecordStatus
    photo_path: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None


class OwnerWithPets(Owner):
    pets: List[Pet] = []


class OwnerSummary(BaseModel):
    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    owner: Owner


class ProfileUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Email
    address: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)


class UserCreate(BaseModel):
    """Modelo para crear cuentas de cualquier rol.
    Este endpoint solo debe ser accesible por superadmins.
    """
    name: str = Field(..., min_length=1, max_length=255)
    email: Email
    password: str = Field(..., min_length=6)
    password_confirmation: str
    phone: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1, max_length=255)
    role: Role = Field(..., description="Rol de la cuenta: client, veterinarian o superadmin")
    status: Optional[RecordStatus] = None

    @model_validator(mode="after")
    def check_passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("La confirmación de la contraseña no coincide")
        return self


class UserUpdate(BaseModel):
    """Actualización completa de una cuenta; la contraseña es opcional."""
    name: str = Field(..., min_length=1, max_length=255)
    email: Email
    password: Optional[str] = Field(None, min_length=6)
    password_confirmation: Optional[str] = None
    phone: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1, max_length=255)
    role: Role
    status: RecordStatus

    @model_validator(mode="after")
    def check_passwords_match(self):
        if self.password and self.password != self.password_confirmation:
            raise ValueError("La confirmación de la contraseña no coincide")
        return self
