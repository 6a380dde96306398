"""
Servicio para la lógica de negocio de Pet.

Gestiona el registro de mascotas: alta, listado según el rol, actualización,
reemplazo de foto, deshabilitación y el reporte mensual de vacunación.
"""

from datetime import date
from typing import List, Optional, Dict, Any
import logging

from services.base_service import BaseService
from repositories.pet_repository import PetRepository
from repositories.owner_repository import OwnerRepository
from repositories.consultation_repository import ConsultationRepository
from database.models import PetORM, OwnerORM
from models.pets import PetCreate, PetUpdate, Pet, VaccinationReportEntry
from core import policies
from core.enums import Role
from core.exceptions import AppException, NotFoundException, ValidationException
from core.storage import PhotoStorage, PhotoUpload
from core.utils import enum_to_value, iter_months, month_key
from utils.datetime_utils import get_local_today, one_year_before

logger = logging.getLogger(__name__)

PET_PHOTO_FOLDER = "pets"


class PetService(BaseService[PetORM, PetRepository]):
    """Servicio para gestionar la lógica de negocio de mascotas."""

    def __init__(
        self,
        repository: PetRepository,
        owner_repository: OwnerRepository,
        consultation_repository: ConsultationRepository,
        storage: PhotoStorage,
    ):
        """
        Initialize pet service.

        Args:
            repository: PetRepository instance
            owner_repository: OwnerRepository instance (target owner lookups)
            consultation_repository: ConsultationRepository instance (veterinarian links)
            storage: Photo storage backend
        """
        super().__init__(repository)
        self.owner_repo = owner_repository
        self.consultation_repo = consultation_repository
        self.storage = storage

    def create_pet(
        self,
        actor: OwnerORM,
        pet_data: PetCreate,
        photo: Optional[PhotoUpload] = None
    ) -> Pet:
        """
        Create a new pet.

        A client always creates for themselves (any owner_id sent is ignored);
        a superadmin may create for any existing owner.

        Raises:
            ForbiddenException: If the role may not create pets
            NotFoundException: If the superadmin targets a missing owner
            ValidationException: If the photo is not valid
        """
        policies.ensure(policies.can_create_pet(actor.role, actor.id))

        owner_id = actor.id
        if Role(actor.role) is Role.superadmin and pet_data.owner_id:
            owner_id = pet_data.owner_id
            if not self.owner_repo.exists(owner_id):
                raise NotFoundException(resource="Dueño", identifier=owner_id)

        data = pet_data.model_dump(exclude={"owner_id"})
        pet_orm = PetORM(
            **{field: enum_to_value(value) for field, value in data.items()},
            owner_id=owner_id,
            status="enabled",
        )

        photo_ref = None
        if photo is not None:
            photo_ref = self.storage.save(photo, PET_PHOTO_FOLDER)
            pet_orm.photo_path = photo_ref

        try:
            created = self.repository.create(pet_orm, user_id=actor.id)
            self.repository.commit()
        except AppException:
            # el archivo no debe quedar huérfano si la fila no se guardó
            self.storage.delete(photo_ref)
            raise

        logger.info(f"Pet {created.id} created by {actor.id} for owner {owner_id}")
        return self._to_response_model(created)

    def list_pets(self, actor: OwnerORM, include_disabled: bool = False) -> List[Pet]:
        """
        List the pets visible to the actor, ordered by name.

        Args:
            actor: Current authenticated owner
            include_disabled: Include disabled pets (honoured for superadmin only)
        """
        pets = self._visible_pets(actor, include_disabled=include_disabled)
        return [self._to_response_model(pet) for pet in pets]

    def get_pet(self, actor: OwnerORM, pet_id: str) -> Pet:
        """
        Get a pet by ID.

        Raises:
            ForbiddenException: If the actor may not view the pet (or it does not exist)
            NotFoundException: If the pet does not exist (superadmin only)
        """
        pet = self.get_for_actor(pet_id, actor)
        policies.ensure(self._can_view(actor, pet))
        return self._to_response_model(pet)

    def update_pet(self, actor: OwnerORM, pet_id: str, pet_update: PetUpdate) -> Pet:
        """
        Replace the editable fields of a pet. The owner never changes here.
        """
        pet = self.get_for_actor(pet_id, actor)
        policies.ensure(policies.can_update_pet(actor.role, actor.id, pet.owner_id))

        for field, value in pet_update.model_dump().items():
            setattr(pet, field, enum_to_value(value))

        updated = self.repository.update(pet, user_id=actor.id)
        self.repository.commit()

        logger.info(f"Pet {pet_id} updated by {actor.id}")
        return self._to_response_model(updated)

    def update_pet_photo(self, actor: OwnerORM, pet_id: str, photo: PhotoUpload) -> Pet:
        """
        Replace the photo of a pet.

        The new file is written and the record committed before the old
        file is removed, so a failure keeps the previous reference intact.
        """
        pet = self.get_for_actor(pet_id, actor)
        policies.ensure(policies.can_update_pet(actor.role, actor.id, pet.owner_id))

        old_ref = pet.photo_path
        new_ref = self.storage.save(photo, PET_PHOTO_FOLDER)
        try:
            pet.photo_path = new_ref
            updated = self.repository.update(pet, user_id=actor.id)
            self.repository.commit()
        except AppException:
            self.storage.delete(new_ref)
            raise

        if old_ref and old_ref != new_ref:
            self.storage.delete(old_ref)

        logger.info(f"Photo of pet {pet_id} replaced by {actor.id}")
        return self._to_response_model(updated)

    def disable_pet(self, actor: OwnerORM, pet_id: str) -> Pet:
        """
        Disable a pet (status = disabled). Disabling twice is a no-op.
        """
        pet = self.get_for_actor(pet_id, actor)
        policies.ensure(policies.can_disable_pet(actor.role, actor.id, pet.owner_id))

        if self.repository.disable(pet, user_id=actor.id):
            self.repository.commit()
            logger.info(f"Pet {pet_id} disabled by {actor.id}")
        else:
            logger.info(f"Pet {pet_id} was already disabled")

        return self._to_response_model(pet)

    def vaccination_report(
        self,
        actor: OwnerORM,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[VaccinationReportEntry]:
        """
        Monthly vaccinated / not vaccinated counts of the enabled pets visible
        to the actor, grouped by registration month.

        Raises:
            ValidationException: If start_date is after end_date
        """
        end_date = end_date or get_local_today()
        start_date = start_date or one_year_before(end_date)
        if start_date > end_date:
            raise ValidationException(
                message="La fecha inicial no puede ser posterior a la fecha final",
                field="start_date"
            )

        counts: Dict[str, Dict[str, int]] = {
            key: {"vaccinated_count": 0, "not_vaccinated_count": 0}
            for key in iter_months(start_date, end_date)
        }
        for pet in self._visible_pets(actor):
            if pet.created_at is None:
                continue
            registered = pet.created_at.date()
            if not (start_date <= registered <= end_date):
                continue
            bucket = counts[month_key(registered)]
            if pet.vaccinated:
                bucket["vaccinated_count"] += 1
            else:
                bucket["not_vaccinated_count"] += 1

        return [VaccinationReportEntry(month=month, **values) for month, values in counts.items()]

    def _visible_pets(self, actor: OwnerORM, include_disabled: bool = False) -> List[PetORM]:
        scope = policies.pet_list_scope(actor.role)
        if scope == "all":
            return self.repository.get_all(include_disabled=include_disabled)
        if scope == "own":
            return self.repository.find_by_owner(actor.id)
        if scope == "linked":
            return self.repository.find_linked_to_veterinarian(actor.id)
        raise ValueError(f"Alcance no contemplado: {scope}")

    def _can_view(self, actor: OwnerORM, pet: PetORM) -> bool:
        linked = False
        if Role(actor.role) is Role.veterinarian and pet.status == "enabled":
            linked = self.consultation_repo.exists_link(actor.id, pet.id)
        return policies.can_view_pet(actor.role, actor.id, pet.owner_id, linked_by_consultation=linked)

    def _to_response_model(self, pet: PetORM) -> Pet:
        """
        Convert ORM model to Pydantic response model.
        """
        return Pet(**self._to_response_dict(pet))

    def _to_response_dict(self, pet: PetORM) -> Dict[str, Any]:
        return pet_to_dict(pet, self.storage)


def pet_to_dict(pet: PetORM, storage: PhotoStorage) -> Dict[str, Any]:
    """Pet ORM -> response dict with the owner projection {id, name, email}."""
    owner = pet.owner
    return {
        "id": pet.id,
        "name": pet.name,
        "species": pet.species,
        "breed": pet.breed,
        "size": pet.size,
        "age": pet.age,
        "vaccinated": pet.vaccinated,
        "food_type": pet.food_type,
        "last_vaccination": pet.last_vaccination,
        "owner_id": pet.owner_id,
        "status": pet.status,
        "photo_path": pet.photo_path,
        "photo_url": storage.url_for(pet.photo_path),
        "owner": {"id": owner.id, "name": owner.name, "email": owner.email} if owner else None,
        "created_at": pet.created_at,
    }
