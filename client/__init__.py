"""
Cliente Python de la API (httpx).
"""
from .session import SessionStore
from .api_client import PetCensusClient, ApiError, SessionExpiredError

__all__ = ["SessionStore", "PetCensusClient", "ApiError", "SessionExpiredError"]
