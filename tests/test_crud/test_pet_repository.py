"""
Tests for PetRepository.

Tests cover:
- Creating pets with audit fields
- Finding by owner and by veterinarian link
- Disabling (single pet and cascade by owner)
"""

import pytest
from sqlalchemy.orm import Session

from database.models import PetORM, OwnerORM, MedicalConsultationORM
from repositories.pet_repository import PetRepository
from core.exceptions import NotFoundException
from tests.conftest import CLIENT_ID, VET_ID, OTHER_VET_ID, PET_ID, OTHER_PET_ID, MISSING_ID


@pytest.fixture
def pet_repository(db_session: Session) -> PetRepository:
    """Create a PetRepository instance."""
    return PetRepository(db_session)


def new_pet(owner_id: str, name: str, status: str = "enabled") -> PetORM:
    return PetORM(
        name=name,
        species="dog",
        breed="Criollo",
        size="medium",
        age=1,
        vaccinated=False,
        food_type="Concentrado",
        owner_id=owner_id,
        status=status,
    )


class TestPetRepositoryCreate:

    def test_create_sets_id_and_audit(
        self,
        pet_repository: PetRepository,
        client_owner: OwnerORM
    ):
        created = pet_repository.create(new_pet(CLIENT_ID, "Toby"), user_id=CLIENT_ID)
        pet_repository.commit()

        assert created.id is not None
        assert created.created_by == CLIENT_ID
        assert created.created_at is not None
        assert created.status == "enabled"


class TestPetRepositoryQueries:

    def test_get_by_id_or_fail(self, pet_repository: PetRepository, client_pet: PetORM):
        assert pet_repository.get_by_id_or_fail(PET_ID).name == "Firulais"
        with pytest.raises(NotFoundException):
            pet_repository.get_by_id_or_fail(MISSING_ID)

    def test_find_by_owner_sorted_and_filtered(
        self,
        pet_repository: PetRepository,
        db_session: Session,
        client_pet: PetORM
    ):
        db_session.add_all([new_pet(CLIENT_ID, "Albóndiga"), new_pet(CLIENT_ID, "Zeus", status="disabled")])
        db_session.commit()

        enabled = pet_repository.find_by_owner(CLIENT_ID)
        everything = pet_repository.find_by_owner(CLIENT_ID, include_disabled=True)

        assert [p.name for p in enabled] == ["Albóndiga", "Firulais"]
        assert len(everything) == 3

    def test_get_all_excludes_disabled(
        self,
        pet_repository: PetRepository,
        db_session: Session,
        client_pet: PetORM,
        other_client_pet: PetORM
    ):
        other_client_pet.status = "disabled"
        db_session.commit()

        assert [p.id for p in pet_repository.get_all()] == [PET_ID]
        assert len(pet_repository.get_all(include_disabled=True)) == 2

    def test_linked_to_veterinarian(
        self,
        pet_repository: PetRepository,
        client_pet: PetORM,
        other_vet_owner: OwnerORM,
        consultation: MedicalConsultationORM
    ):
        assert [p.id for p in pet_repository.find_linked_to_veterinarian(VET_ID)] == [OTHER_PET_ID]
        assert pet_repository.find_linked_to_veterinarian(OTHER_VET_ID) == []


class TestPetRepositoryDisable:

    def test_disable_is_idempotent(self, pet_repository: PetRepository, client_pet: PetORM):
        assert pet_repository.disable(client_pet, user_id=CLIENT_ID) is True
        assert pet_repository.disable(client_pet, user_id=CLIENT_ID) is False
        assert client_pet.disabled_by == CLIENT_ID
        assert client_pet.disabled_at is not None

    def test_disable_by_owner(
        self,
        pet_repository: PetRepository,
        db_session: Session,
        client_pet: PetORM,
        other_client_pet: PetORM
    ):
        db_session.add(new_pet(CLIENT_ID, "Toby"))
        db_session.commit()

        assert pet_repository.disable_by_owner(CLIENT_ID, user_id=CLIENT_ID) == 2
        pet_repository.commit()

        assert pet_repository.find_by_owner(CLIENT_ID) == []
        assert other_client_pet.status == "enabled"
