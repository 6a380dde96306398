from .pets import Pet, PetCreate, PetUpdate, VaccinationReportEntry
from .consultations import (
    Consultation,
    ConsultationCreate,
    ConsultationStatusUpdate,
    ConsultationMessage,
)
from .owners import (
    Owner,
    OwnerWithPets,
    OwnerSummary,
    AuthResponse,
    RegisterRequest,
    LoginRequest,
    ProfileUpdate,
    UserCreate,
    UserUpdate,
)
from .common import (
    MessageResponse,
    ErrorResponse,
    HealthCheckResponse,
    create_message_response,
    create_error_response,
)

__all__ = [
    # Pets
    "Pet", "PetCreate", "PetUpdate", "VaccinationReportEntry",
    # Consultations
    "Consultation", "ConsultationCreate", "ConsultationStatusUpdate", "ConsultationMessage",
    # Owners
    "Owner", "OwnerWithPets", "OwnerSummary", "AuthResponse", "RegisterRequest",
    "LoginRequest", "ProfileUpdate", "UserCreate", "UserUpdate",
    # Common responses
    "MessageResponse", "ErrorResponse", "HealthCheckResponse",
    "create_message_response", "create_error_response",
]
