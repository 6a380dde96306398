from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, Date, Boolean, Index
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def gen_uuid_str():
    return str(uuid4())


def get_current_time():
    """Obtiene la hora actual (naive) en la zona horaria local configurada."""
    from utils.datetime_utils import get_local_now
    return get_local_now().replace(tzinfo=None)


#ORM: Owners (cualquier cuenta: cliente, veterinario o superadmin)
class OwnerORM(Base):
    __tablename__ = "owners"
    id = Column(String(36), primary_key=True, default=gen_uuid_str)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_salt = Column(String(64), nullable=False)
    password_hash = Column(String(128), nullable=False)
    address = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    photo_path = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="client", index=True)
    status = Column(String(20), nullable=False, default="enabled")
    #auditoría
    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=get_current_time)
    updated_at = Column(DateTime, default=get_current_time, onupdate=get_current_time)
    disabled_at = Column(DateTime, nullable=True)
    disabled_by = Column(String(36), nullable=True)

    pets = relationship("PetORM", back_populates="owner", lazy="select")


#ORM: Pets
class PetORM(Base):
    __tablename__ = "pets"
    id = Column(String(36), primary_key=True, default=gen_uuid_str)
    name = Column(String(255), nullable=False)
    species = Column(String(20), nullable=False)
    breed = Column(String(255), nullable=False)
    size = Column(String(20), nullable=False)
    age = Column(Integer, nullable=False)
    vaccinated = Column(Boolean, nullable=False, default=False)
    food_type = Column(String(255), nullable=False)
    photo_path = Column(String(255), nullable=True)
    last_vaccination = Column(Date, nullable=True)
    owner_id = Column(String(36), ForeignKey("owners.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="enabled")
    #auditoría
    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=get_current_time)
    updated_at = Column(DateTime, default=get_current_time, onupdate=get_current_time)
    disabled_at = Column(DateTime, nullable=True)
    disabled_by = Column(String(36), nullable=True)

    owner = relationship("OwnerORM", back_populates="pets", lazy="joined")


#ORM: Consultas médicas
class MedicalConsultationORM(Base):
    __tablename__ = "medical_consultations"
    id = Column(String(36), primary_key=True, default=gen_uuid_str)
    pet_id = Column(String(36), ForeignKey("pets.id"), nullable=False)
    client_id = Column(String(36), ForeignKey("owners.id"), nullable=False)
    veterinarian_id = Column(String(36), ForeignKey("owners.id"), nullable=False)
    scheduled_at = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    notes = Column(Text, nullable=True)
    #auditoría
    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=get_current_time)
    updated_at = Column(DateTime, default=get_current_time, onupdate=get_current_time)

    pet = relationship("PetORM", lazy="joined")
    client = relationship("OwnerORM", foreign_keys=[client_id], lazy="joined")
    veterinarian = relationship("OwnerORM", foreign_keys=[veterinarian_id], lazy="joined")

    __table_args__ = (
        Index("ix_consultations_veterinarian_scheduled", "veterinarian_id", "scheduled_at"),
        Index("ix_consultations_client_scheduled", "client_id", "scheduled_at"),
        Index("ix_consultations_pet_scheduled", "pet_id", "scheduled_at"),
    )


#ORM: Tokens de acceso emitidos (permiten logout y revocación)
class AccessTokenORM(Base):
    __tablename__ = "access_tokens"
    jti = Column(String(36), primary_key=True, default=gen_uuid_str)
    owner_id = Column(String(36), ForeignKey("owners.id"), nullable=False, index=True)
    issued_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime, nullable=True)


__all__ = [
    "Base",
    "OwnerORM",
    "PetORM",
    "MedicalConsultationORM",
    "AccessTokenORM",
]
