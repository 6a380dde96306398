"""
Tests for ConsultationService.

Tests cover:
- The status diagram, strict and relaxed
- Timezone-aware scheduling times stored as local time
- Client id always taken from the pet's owner
"""

import pytest
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from database.models import OwnerORM, PetORM, MedicalConsultationORM
from repositories.consultation_repository import ConsultationRepository
from repositories.pet_repository import PetRepository
from repositories.owner_repository import OwnerRepository
from services.consultation_service import ConsultationService
from models.consultations import ConsultationCreate
from core.exceptions import ForbiddenException, ValidationException
from tests.conftest import CLIENT_ID, VET_ID, PET_ID, CONSULTATION_ID


def build_service(db_session: Session, strict: bool = True) -> ConsultationService:
    return ConsultationService(
        ConsultationRepository(db_session),
        PetRepository(db_session),
        OwnerRepository(db_session),
        strict_transitions=strict,
    )


class TestStatusDiagram:

    @pytest.mark.parametrize("current,target,allowed", [
        ("PENDING", "CONFIRMED", True),
        ("PENDING", "CANCELLED", True),
        ("CONFIRMED", "CANCELLED", True),
        ("CONFIRMED", "CONFIRMED", False),
        ("CANCELLED", "CONFIRMED", False),
        ("CANCELLED", "CANCELLED", False),
    ])
    def test_strict_transitions(
        self,
        db_session: Session,
        vet_owner: OwnerORM,
        consultation: MedicalConsultationORM,
        current: str,
        target: str,
        allowed: bool
    ):
        consultation.status = current
        db_session.commit()
        service = build_service(db_session, strict=True)

        if allowed:
            assert service.update_status(vet_owner, CONSULTATION_ID, target).status.value == target
        else:
            with pytest.raises(ValidationException):
                service.update_status(vet_owner, CONSULTATION_ID, target)

    def test_relaxed_mode_allows_any_assignable_status(
        self,
        db_session: Session,
        vet_owner: OwnerORM,
        consultation: MedicalConsultationORM
    ):
        consultation.status = "CANCELLED"
        db_session.commit()
        service = build_service(db_session, strict=False)

        result = service.update_status(vet_owner, CONSULTATION_ID, "confirmed")

        assert result.status.value == "CONFIRMED"

    def test_pending_is_never_assignable(
        self,
        db_session: Session,
        vet_owner: OwnerORM,
        consultation: MedicalConsultationORM
    ):
        with pytest.raises(ValidationException):
            build_service(db_session, strict=False).update_status(vet_owner, CONSULTATION_ID, "PENDING")

    def test_client_rejected_before_lookup(self, db_session: Session, client_owner: OwnerORM):
        with pytest.raises(ForbiddenException):
            build_service(db_session).update_status(client_owner, "no-existe", "CONFIRMED")


class TestScheduling:

    def test_aware_datetime_is_stored_as_local_time(
        self,
        db_session: Session,
        client_owner: OwnerORM,
        vet_owner: OwnerORM,
        client_pet: PetORM
    ):
        data = ConsultationCreate(
            pet_id=PET_ID,
            veterinarian_id=VET_ID,
            scheduled_at=datetime(2025, 3, 1, 15, 0, tzinfo=timezone.utc),
        )

        result = build_service(db_session).create_consultation(client_owner, data)

        # America/Bogota is UTC-5
        assert result.scheduled_at == datetime(2025, 3, 1, 10, 0)
        assert result.client_id == CLIENT_ID

    def test_superadmin_records_pet_owner_as_client(
        self,
        db_session: Session,
        admin_owner: OwnerORM,
        vet_owner: OwnerORM,
        client_pet: PetORM
    ):
        data = ConsultationCreate(pet_id=PET_ID, veterinarian_id=VET_ID, scheduled_at=datetime(2025, 3, 1, 9))

        result = build_service(db_session).create_consultation(admin_owner, data)

        assert result.client_id == CLIENT_ID
        assert result.status.value == "PENDING"

    @pytest.mark.parametrize("disabled,field", [
        ("pet", "pet_id"),
        ("veterinarian", "veterinarian_id"),
    ])
    def test_disabled_records_are_not_bookable(
        self,
        db_session: Session,
        admin_owner: OwnerORM,
        vet_owner: OwnerORM,
        client_pet: PetORM,
        disabled: str,
        field: str
    ):
        target = client_pet if disabled == "pet" else vet_owner
        target.status = "disabled"
        db_session.commit()
        data = ConsultationCreate(pet_id=PET_ID, veterinarian_id=VET_ID, scheduled_at=datetime(2025, 3, 1, 9))

        with pytest.raises(ValidationException) as exc_info:
            build_service(db_session).create_consultation(admin_owner, data)

        assert exc_info.value.details["field"] == field
        assert db_session.query(MedicalConsultationORM).count() == 0
