from .auth import router as auth_router
from .pets import router as pets_router
from .consultations import router as consultations_router
from .owners import router as owners_router
from .profile import router as profile_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "pets_router",
    "consultations_router",
    "owners_router",
    "profile_router",
    "users_router",
]
