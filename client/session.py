"""
Estado de sesión del cliente: token y cuenta actual, sin globales.
"""

from typing import Optional


class SessionStore:
    """Guarda el token bearer y la cuenta autenticada de un cliente.

    Cada `PetCensusClient` recibe su propia instancia; se invalida de forma
    explícita con `clear()` (logout, cuenta deshabilitada o respuesta 401).
    """

    def __init__(self):
        self.token: Optional[str] = None
        self.owner: Optional[dict] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set(self, token: str, owner: Optional[dict] = None) -> None:
        self.token = token
        self.owner = owner

    def clear(self) -> None:
        self.token = None
        self.owner = None

    def auth_headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
