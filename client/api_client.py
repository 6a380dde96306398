"""
Cliente HTTP (httpx) de la API de censo de mascotas.

El token se pasa explícitamente en cada petición desde el `SessionStore`;
una respuesta 401 limpia la sesión y se notifica con `SessionExpiredError`.
"""

import logging
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

import httpx

from client.session import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """Respuesta de error de la API."""

    def __init__(self, status_code: int, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class SessionExpiredError(ApiError):
    """El servidor rechazó el token (401); la sesión local ya fue limpiada."""


class PetCensusClient:
    """Cliente síncrono. Acepta un `httpx.Client` ya construido (p. ej. TestClient)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[SessionStore] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10,
    ):
        self.session = session or SessionStore()
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ==================== transport ====================

    def _request(self, method: str, path: str, authenticated: bool = True, **kwargs) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if authenticated:
            headers.update(self.session.auth_headers())
        response = self.http.request(method, path, headers=headers, **kwargs)

        if response.status_code == 401 and authenticated:
            logger.info(f"{method} {path}: token rechazado, limpiando sesión")
            self.session.clear()
            raise SessionExpiredError(401, self._detail(response))
        if response.is_error:
            raise ApiError(response.status_code, self._detail(response))
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _detail(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return body.get("detail", body.get("message", body))
        return body

    # ==================== identity ====================

    def register(self, name: str, email: str, password: str, address: str, phone: str) -> dict:
        data = self._request("POST", "/register", authenticated=False, json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password,
            "address": address,
            "phone": phone,
        })
        self.session.set(data["token"], data["owner"])
        return data["owner"]

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/login", authenticated=False, json={"email": email, "password": password})
        self.session.set(data["token"], data["owner"])
        return data["owner"]

    def logout(self) -> None:
        try:
            self._request("POST", "/logout")
        finally:
            self.session.clear()

    def current_owner(self) -> dict:
        owner = self._request("GET", "/owner")
        self.session.owner = owner
        return owner

    # ==================== profile ====================

    def get_profile(self) -> dict:
        return self._request("GET", "/profile")

    def update_profile(self, **fields) -> dict:
        return self._request("PUT", "/profile", json=fields)

    def upload_profile_photo(self, content: bytes, content_type: str, filename: str = "photo") -> dict:
        return self._request("POST", "/profile/photo", files={"photo": (filename, content, content_type)})

    def disable_profile(self) -> None:
        try:
            self._request("POST", "/profile/disable")
        finally:
            self.session.clear()

    def list_veterinarians(self) -> List[dict]:
        return self._request("GET", "/veterinarians")

    # ==================== pets ====================

    def list_pets(self, include_disabled: bool = False) -> List[dict]:
        params = {"include_disabled": "true"} if include_disabled else None
        return self._request("GET", "/pets", params=params)

    def get_pet(self, pet_id: str) -> dict:
        return self._request("GET", f"/pets/{pet_id}")

    def create_pet(self, photo: Optional[Tuple[str, bytes, str]] = None, **fields) -> dict:
        """Alta multipart; `photo` es `(filename, content, content_type)`."""
        files = {"photo": photo} if photo else None
        return self._request("POST", "/pets", data=_form(fields), files=files)

    def update_pet(self, pet_id: str, **fields) -> dict:
        return self._request("PUT", f"/pets/{pet_id}", json=_jsonable(fields))

    def disable_pet(self, pet_id: str) -> dict:
        return self._request("DELETE", f"/pets/{pet_id}")

    def upload_pet_photo(self, pet_id: str, content: bytes, content_type: str, filename: str = "photo") -> dict:
        return self._request("POST", f"/pets/{pet_id}/photo", files={"photo": (filename, content, content_type)})

    def vaccination_report(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[dict]:
        params = {}
        if start_date:
            params["start_date"] = start_date.isoformat()
        if end_date:
            params["end_date"] = end_date.isoformat()
        return self._request("GET", "/pets/vaccination-report", params=params or None)

    # ==================== consultations ====================

    def list_consultations(self) -> List[dict]:
        return self._request("GET", "/medical-consultations")

    def get_consultation(self, consultation_id: str) -> dict:
        return self._request("GET", f"/medical-consultations/{consultation_id}")

    def create_consultation(
        self,
        pet_id: str,
        veterinarian_id: str,
        scheduled_at: datetime,
        notes: Optional[str] = None
    ) -> dict:
        data = self._request("POST", "/medical-consultations", json=_jsonable({
            "pet_id": pet_id,
            "veterinarian_id": veterinarian_id,
            "scheduled_at": scheduled_at,
            "notes": notes,
        }))
        return data["consultation"]

    def update_consultation_status(self, consultation_id: str, status: str) -> dict:
        data = self._request(
            "PATCH", f"/medical-consultations/{consultation_id}/status", json={"status": status}
        )
        return data["consultation"]


def _jsonable(fields: dict) -> dict:
    return {
        key: value.isoformat() if isinstance(value, (date, datetime)) else value
        for key, value in fields.items()
    }


def _form(fields: dict) -> dict:
    # los campos vacíos no se envían; booleanos como "true"/"false"
    form = {}
    for key, value in _jsonable(fields).items():
        if value is None:
            continue
        form[key] = str(value).lower() if isinstance(value, bool) else str(value)
    return form
