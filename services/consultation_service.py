"""
Servicio para la lógica de negocio de MedicalConsultation.

Agenda consultas y las mueve por el diagrama de estados
PENDING -> {CONFIRMED, CANCELLED}, CONFIRMED -> {CANCELLED}.
"""

from typing import List, Dict, Any
import logging

from config import settings
from services.base_service import BaseService
from repositories.consultation_repository import ConsultationRepository
from repositories.pet_repository import PetRepository
from repositories.owner_repository import OwnerRepository
from database.models import MedicalConsultationORM, OwnerORM
from models.consultations import ConsultationCreate, Consultation
from core import policies
from core.enums import ConsultationStatus, CONSULTATION_TRANSITIONS, Role, RecordStatus
from core.exceptions import NotFoundException, ValidationException
from core.security import is_valid_uuid
from utils.datetime_utils import to_naive_local

logger = logging.getLogger(__name__)

#estados que se pueden asignar explícitamente (PENDING solo al crear)
ASSIGNABLE_STATUSES = (ConsultationStatus.CONFIRMED, ConsultationStatus.CANCELLED)


class ConsultationService(BaseService[MedicalConsultationORM, ConsultationRepository]):
    """Servicio para gestionar consultas médicas."""

    def __init__(
        self,
        repository: ConsultationRepository,
        pet_repository: PetRepository,
        owner_repository: OwnerRepository,
        strict_transitions: bool = None,
    ):
        """
        Initialize consultation service.

        Args:
            repository: ConsultationRepository instance
            pet_repository: PetRepository instance
            owner_repository: OwnerRepository instance
            strict_transitions: Enforce the status diagram (defaults to settings)
        """
        super().__init__(repository)
        self.pet_repo = pet_repository
        self.owner_repo = owner_repository
        if strict_transitions is None:
            strict_transitions = settings.strict_consultation_transitions
        self.strict_transitions = strict_transitions

    def create_consultation(self, actor: OwnerORM, data: ConsultationCreate) -> Consultation:
        """
        Schedule a consultation in PENDING status.

        The client recorded is always the pet's owner, not the actor.

        Raises:
            ForbiddenException: Veterinarian actor, or client scheduling for a pet they do not own
            NotFoundException: Pet or veterinarian does not exist
            ValidationException: The selected account is not a veterinarian,
                or the pet or veterinarian is disabled
        """
        policies.ensure(policies.can_create_consultation(actor.role))

        pet = self.pet_repo.get_by_id(data.pet_id) if is_valid_uuid(data.pet_id) else None
        if pet is None:
            raise NotFoundException(resource="Mascota", identifier=data.pet_id)

        policies.ensure(
            policies.can_schedule_for_pet(actor.role, actor.id, pet.owner_id),
            message="No puede agendar consultas para una mascota que no es suya"
        )
        if pet.status != RecordStatus.enabled.value:
            raise ValidationException(
                message="La mascota está deshabilitada",
                field="pet_id"
            )

        vet = self.owner_repo.get_by_id(data.veterinarian_id) if is_valid_uuid(data.veterinarian_id) else None
        if vet is None:
            raise NotFoundException(resource="Veterinario", identifier=data.veterinarian_id)
        if vet.role != Role.veterinarian.value:
            raise ValidationException(
                message="El usuario seleccionado no es veterinario",
                field="veterinarian_id"
            )
        if vet.status != RecordStatus.enabled.value:
            raise ValidationException(
                message="El veterinario está deshabilitado",
                field="veterinarian_id"
            )

        consultation = MedicalConsultationORM(
            pet_id=pet.id,
            client_id=pet.owner_id,
            veterinarian_id=vet.id,
            scheduled_at=to_naive_local(data.scheduled_at),
            status=ConsultationStatus.PENDING.value,
            notes=data.notes,
        )
        created = self.repository.create(consultation, user_id=actor.id)
        self.repository.commit()

        logger.info(
            f"Consultation {created.id} scheduled by {actor.id} "
            f"(pet={pet.id}, vet={vet.id}, at={created.scheduled_at})"
        )
        return self._to_response_model(created)

    def list_consultations(self, actor: OwnerORM) -> List[Consultation]:
        """
        List the consultations visible to the actor, newest first.
        """
        scope = policies.consultation_list_scope(actor.role)
        if scope == "client":
            items = self.repository.find_by_client(actor.id)
        elif scope == "veterinarian":
            items = self.repository.find_by_veterinarian(actor.id)
        elif scope == "all":
            items = self.repository.get_all()
        else:
            raise ValueError(f"Alcance no contemplado: {scope}")
        return [self._to_response_model(item) for item in items]

    def get_consultation(self, actor: OwnerORM, consultation_id: str) -> Consultation:
        consultation = self.get_for_actor(consultation_id, actor)
        policies.ensure(
            policies.can_view_consultation(
                actor.role, actor.id, consultation.client_id, consultation.veterinarian_id
            )
        )
        return self._to_response_model(consultation)

    def update_status(self, actor: OwnerORM, consultation_id: str, new_status: str) -> Consultation:
        """
        Move a consultation to CONFIRMED or CANCELLED.

        Raises:
            ValidationException: Status outside {CONFIRMED, CANCELLED}, or a
                transition the diagram does not allow (strict mode)
            ForbiddenException: Clients always; veterinarians not assigned
            NotFoundException: Consultation does not exist (superadmin only)
        """
        target = self._parse_status(new_status)

        if Role(actor.role) is Role.client:
            # clients are rejected before any lookup
            policies.ensure(policies.can_update_consultation_status(actor.role))

        consultation = self.get_for_actor(consultation_id, actor)
        policies.ensure(
            policies.can_update_consultation_status(
                actor.role, actor.id, consultation.veterinarian_id
            )
        )

        current = ConsultationStatus(consultation.status)
        if self.strict_transitions and target not in CONSULTATION_TRANSITIONS[current]:
            raise ValidationException(
                message=f"Transición de estado no permitida: {current.value} -> {target.value}",
                field="status",
                details={"current_status": current.value}
            )

        consultation.status = target.value
        updated = self.repository.update(consultation, user_id=actor.id)
        self.repository.commit()

        logger.info(
            f"Consultation {consultation_id} status {current.value} -> {target.value} by {actor.id}"
        )
        return self._to_response_model(updated)

    @staticmethod
    def _parse_status(value: str) -> ConsultationStatus:
        try:
            status = ConsultationStatus(str(value).upper())
        except ValueError:
            status = None
        if status not in ASSIGNABLE_STATUSES:
            raise ValidationException(
                message="Estado inválido: debe ser CONFIRMED o CANCELLED",
                field="status",
                details={"value": value}
            )
        return status

    def _to_response_model(self, consultation: MedicalConsultationORM) -> Consultation:
        return Consultation(**self._to_response_dict(consultation))

    def _to_response_dict(self, consultation: MedicalConsultationORM) -> Dict[str, Any]:
        pet, client, vet = consultation.pet, consultation.client, consultation.veterinarian
        return {
            "id": consultation.id,
            "pet_id": consultation.pet_id,
            "client_id": consultation.client_id,
            "veterinarian_id": consultation.veterinarian_id,
            "scheduled_at": consultation.scheduled_at,
            "status": consultation.status,
            "notes": consultation.notes,
            "pet": {
                "id": pet.id,
                "name": pet.name,
                "species": pet.species,
                "breed": pet.breed,
                "owner_id": pet.owner_id,
            } if pet else None,
            "client": _person(client),
            "veterinarian": _person(vet),
            "created_at": consultation.created_at,
        }


def _person(owner: OwnerORM):
    if owner is None:
        return None
    return {"id": owner.id, "name": owner.name, "email": owner.email}
