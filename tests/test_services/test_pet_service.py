"""
Tests for PetService.

Tests cover:
- Photo files cleaned up when the record cannot be saved
- Vaccination report bucketing by registration month
"""

import pytest
from datetime import date, datetime
from sqlalchemy.orm import Session

from database.models import OwnerORM, PetORM
from repositories.pet_repository import PetRepository
from repositories.owner_repository import OwnerRepository
from repositories.consultation_repository import ConsultationRepository
from services.pet_service import PetService
from models.pets import PetCreate
from core.exceptions import DatabaseException, NotFoundException, ValidationException
from core.storage import PhotoStorage, PhotoUpload
from tests.conftest import CLIENT_ID, PET_ID, MISSING_ID, PNG_BYTES


class FailingPetRepository(PetRepository):
    """Pet repository whose writes always fail."""

    def create(self, entity, user_id=None):
        raise DatabaseException("Error al crear Mascota")

    def update(self, entity, user_id=None):
        raise DatabaseException("Error al actualizar Mascota")


def build_service(db_session: Session, media_root, repository_class=PetRepository) -> PetService:
    return PetService(
        repository_class(db_session),
        OwnerRepository(db_session),
        ConsultationRepository(db_session),
        PhotoStorage(str(media_root)),
    )


def stored_files(media_root):
    return [p for p in media_root.rglob("*") if p.is_file()]


@pytest.fixture
def photo() -> PhotoUpload:
    return PhotoUpload(content=PNG_BYTES, content_type="image/png", filename="foto.png")


class TestPhotoCleanup:

    def test_create_failure_removes_new_file(
        self,
        db_session: Session,
        media_root,
        client_owner: OwnerORM,
        pet_data,
        photo: PhotoUpload
    ):
        service = build_service(db_session, media_root, FailingPetRepository)

        with pytest.raises(DatabaseException):
            service.create_pet(client_owner, PetCreate(**pet_data), photo=photo)

        assert stored_files(media_root) == []

    def test_replace_failure_keeps_old_file(
        self,
        db_session: Session,
        media_root,
        client_owner: OwnerORM,
        client_pet: PetORM,
        photo: PhotoUpload
    ):
        first = build_service(db_session, media_root).update_pet_photo(client_owner, PET_ID, photo)
        service = build_service(db_session, media_root, FailingPetRepository)

        with pytest.raises(DatabaseException):
            service.update_pet_photo(client_owner, PET_ID, photo)

        assert [p.relative_to(media_root).as_posix() for p in stored_files(media_root)] == [first.photo_path]

    def test_superadmin_missing_owner(
        self,
        db_session: Session,
        media_root,
        admin_owner: OwnerORM,
        pet_data
    ):
        with pytest.raises(NotFoundException):
            build_service(db_session, media_root).create_pet(
                admin_owner, PetCreate(**pet_data, owner_id=MISSING_ID)
            )


class TestVaccinationReport:

    def add_pet(self, db_session: Session, name: str, registered: datetime, vaccinated: bool, status="enabled"):
        db_session.add(PetORM(
            name=name,
            species="cat",
            breed="Criollo",
            size="small",
            age=1,
            vaccinated=vaccinated,
            food_type="Concentrado",
            owner_id=CLIENT_ID,
            status=status,
            created_at=registered,
        ))
        db_session.commit()

    def test_groups_by_month(self, db_session: Session, media_root, client_owner: OwnerORM):
        self.add_pet(db_session, "Uno", datetime(2024, 1, 5), True)
        self.add_pet(db_session, "Dos", datetime(2024, 1, 20), False)
        self.add_pet(db_session, "Tres", datetime(2024, 3, 2), True)
        self.add_pet(db_session, "Fuera", datetime(2023, 12, 31), True)
        self.add_pet(db_session, "Inactiva", datetime(2024, 3, 3), True, status="disabled")

        report = build_service(db_session, media_root).vaccination_report(
            client_owner, date(2024, 1, 1), date(2024, 3, 31)
        )

        assert [(e.month, e.vaccinated_count, e.not_vaccinated_count) for e in report] == [
            ("2024-01", 1, 1),
            ("2024-02", 0, 0),
            ("2024-03", 1, 0),
        ]

    def test_start_after_end(self, db_session: Session, media_root, client_owner: OwnerORM):
        with pytest.raises(ValidationException):
            build_service(db_session, media_root).vaccination_report(
                client_owner, date(2024, 5, 1), date(2024, 1, 1)
            )
