"""
Configuración de fixtures para pytest.

Este módulo contiene fixtures reutilizables para todos los tests.
"""

import pytest
import os
from typing import Generator, Dict, Any
from datetime import datetime, date, timedelta
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Configurar para usar base de datos en memoria para tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from main import app
from database.db import get_db, hash_password
from database.models import Base, OwnerORM, PetORM, MedicalConsultationORM
from auth import create_access_token
from config import settings


CLIENT_ID = "12345678-1234-5678-1234-567812345678"
OTHER_CLIENT_ID = "23456789-2345-6789-2345-678923456789"
VET_ID = "87654321-4321-8765-4321-876543218765"
OTHER_VET_ID = "98765432-5432-9876-5432-987654329876"
ADMIN_ID = "ffffffff-ffff-ffff-ffff-ffffffffffff"
PET_ID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"
OTHER_PET_ID = "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb"
CONSULTATION_ID = "cccccccc-cccc-cccc-cccc-cccccccccccc"
MISSING_ID = "00000000-0000-0000-0000-000000000000"

PASSWORD = "password123"

# PNG de 1x1 pixel
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06"
    b"\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01"
    b"\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


# ==================== Database Fixtures ====================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def media_root(tmp_path, monkeypatch):
    """Store uploaded photos in a temporary directory."""
    root = tmp_path / "media"
    root.mkdir()
    monkeypatch.setattr(settings, "media_root", str(root))
    return root


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Owner Fixtures ====================

def make_owner(
    db_session: Session,
    id: str,
    name: str,
    email: str,
    role: str,
    status: str = "enabled",
) -> OwnerORM:
    """Insert an account with the shared test password."""
    salt_hex, hash_hex = hash_password(PASSWORD)
    owner = OwnerORM(
        id=id,
        name=name,
        email=email,
        address="Calle 1 # 2-3",
        phone="3001234567",
        role=role,
        status=status,
        password_salt=salt_hex,
        password_hash=hash_hex,
    )
    db_session.add(owner)
    db_session.commit()
    db_session.refresh(owner)
    return owner


@pytest.fixture
def client_owner(db_session: Session) -> OwnerORM:
    """Create a client account."""
    return make_owner(db_session, CLIENT_ID, "Ana Cliente", "ana@example.com", "client")


@pytest.fixture
def other_client_owner(db_session: Session) -> OwnerORM:
    """Create a second client (used to test ownership)."""
    return make_owner(db_session, OTHER_CLIENT_ID, "Beto Cliente", "beto@example.com", "client")


@pytest.fixture
def vet_owner(db_session: Session) -> OwnerORM:
    """Create a veterinarian account."""
    return make_owner(db_session, VET_ID, "Dra. Vera", "vera@example.com", "veterinarian")


@pytest.fixture
def other_vet_owner(db_session: Session) -> OwnerORM:
    """Create a veterinarian not assigned to any consultation."""
    return make_owner(db_session, OTHER_VET_ID, "Dr. Omar", "omar@example.com", "veterinarian")


@pytest.fixture
def admin_owner(db_session: Session) -> OwnerORM:
    """Create a superadmin account."""
    return make_owner(db_session, ADMIN_ID, "Super Admin", "admin@example.com", "superadmin")


# ==================== Auth Token Fixtures ====================

def issue_token(db_session: Session, owner: OwnerORM) -> str:
    token = create_access_token(data={"sub": owner.id}, db=db_session)
    db_session.commit()
    return token


@pytest.fixture
def client_token(db_session: Session, client_owner: OwnerORM) -> str:
    """Generate a valid (recorded) JWT token for the client."""
    return issue_token(db_session, client_owner)


@pytest.fixture
def other_client_token(db_session: Session, other_client_owner: OwnerORM) -> str:
    return issue_token(db_session, other_client_owner)


@pytest.fixture
def vet_token(db_session: Session, vet_owner: OwnerORM) -> str:
    return issue_token(db_session, vet_owner)


@pytest.fixture
def other_vet_token(db_session: Session, other_vet_owner: OwnerORM) -> str:
    return issue_token(db_session, other_vet_owner)


@pytest.fixture
def admin_token(db_session: Session, admin_owner: OwnerORM) -> str:
    return issue_token(db_session, admin_owner)


@pytest.fixture
def auth_headers_client(client_token: str) -> Dict[str, str]:
    """Generate authentication headers for the client."""
    return {"Authorization": f"Bearer {client_token}"}


@pytest.fixture
def auth_headers_other_client(other_client_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {other_client_token}"}


@pytest.fixture
def auth_headers_vet(vet_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {vet_token}"}


@pytest.fixture
def auth_headers_other_vet(other_vet_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {other_vet_token}"}


@pytest.fixture
def auth_headers_admin(admin_token: str) -> Dict[str, str]:
    """Generate authentication headers for the superadmin."""
    return {"Authorization": f"Bearer {admin_token}"}


# ==================== Pet Fixtures ====================

@pytest.fixture
def pet_data() -> Dict[str, Any]:
    """Sample pet data for testing."""
    return {
        "name": "Firulais",
        "species": "dog",
        "breed": "Labrador",
        "size": "large",
        "age": 3,
        "vaccinated": True,
        "food_type": "Concentrado",
        "last_vaccination": "2024-05-10",
    }


@pytest.fixture
def client_pet(db_session: Session, client_owner: OwnerORM) -> PetORM:
    """Create a pet owned by the client."""
    pet = PetORM(
        id=PET_ID,
        name="Firulais",
        species="dog",
        breed="Labrador",
        size="large",
        age=3,
        vaccinated=True,
        food_type="Concentrado",
        last_vaccination=date(2024, 5, 10),
        owner_id=client_owner.id,
        status="enabled",
    )
    db_session.add(pet)
    db_session.commit()
    db_session.refresh(pet)
    return pet


@pytest.fixture
def other_client_pet(db_session: Session, other_client_owner: OwnerORM) -> PetORM:
    """Create a pet owned by the second client."""
    pet = PetORM(
        id=OTHER_PET_ID,
        name="Michi",
        species="cat",
        breed="Siamés",
        size="small",
        age=2,
        vaccinated=False,
        food_type="Húmedo",
        owner_id=other_client_owner.id,
        status="enabled",
    )
    db_session.add(pet)
    db_session.commit()
    db_session.refresh(pet)
    return pet


# ==================== Consultation Fixtures ====================

@pytest.fixture
def consultation(
    db_session: Session,
    other_client_pet: PetORM,
    vet_owner: OwnerORM
) -> MedicalConsultationORM:
    """PENDING consultation linking the veterinarian with the second client's pet."""
    item = MedicalConsultationORM(
        id=CONSULTATION_ID,
        pet_id=other_client_pet.id,
        client_id=other_client_pet.owner_id,
        veterinarian_id=vet_owner.id,
        scheduled_at=datetime.combine(date.today() + timedelta(days=1), datetime.min.time()).replace(hour=10),
        status="PENDING",
        notes="Control de rutina",
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


# ==================== Utility Functions ====================

def assert_valid_uuid(uuid_string: str) -> bool:
    """Assert that a string is a valid UUID."""
    from uuid import UUID
    try:
        UUID(str(uuid_string))
        return True
    except (ValueError, AttributeError):
        return False
