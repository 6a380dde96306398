"""
Servicio para la lógica de negocio de Owner (cuentas).

Cubre registro e inicio de sesión, el perfil propio, el listado de
veterinarios y la gestión de cuentas del superadmin detrás de /users.
Deshabilitar una cuenta deshabilita sus mascotas y revoca todos sus tokens.
"""

from typing import List, Optional, Dict, Any
import logging

from auth import create_access_token
from services.base_service import BaseService
from services.pet_service import pet_to_dict
from repositories.owner_repository import OwnerRepository
from repositories.pet_repository import PetRepository
from repositories.access_token_repository import AccessTokenRepository
from database.models import OwnerORM
from database.db import hash_password, verify_password, enable_record
from models.owners import (
    AuthResponse,
    LoginRequest,
    Owner,
    OwnerSummary,
    OwnerWithPets,
    ProfileUpdate,
    RegisterRequest,
    UserCreate,
    UserUpdate,
)
from models.pets import Pet
from core import policies
from core.enums import Role, RecordStatus
from core.exceptions import (
    AppException,
    DuplicateException,
    ForbiddenException,
    ValidationException,
)
from core.storage import PhotoStorage, PhotoUpload
from core.utils import enum_to_value

logger = logging.getLogger(__name__)

PROFILE_PHOTO_FOLDER = "profiles"


class OwnerService(BaseService[OwnerORM, OwnerRepository]):
    """Servicio de cuentas, identidad y perfil."""

    def __init__(
        self,
        repository: OwnerRepository,
        pet_repository: PetRepository,
        token_repository: AccessTokenRepository,
        storage: PhotoStorage,
    ):
        super().__init__(repository)
        self.pet_repo = pet_repository
        self.token_repo = token_repository
        self.storage = storage

    # ==================== Identity ====================

    def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Register a new client account and issue its first token.

        Raises:
            DuplicateException: If the email is already in use
        """
        self._ensure_email_available(data.email)

        salt, pwd_hash = hash_password(data.password)
        owner = OwnerORM(
            name=data.name,
            email=data.email,
            password_salt=salt,
            password_hash=pwd_hash,
            address=data.address,
            phone=data.phone,
            role=Role.client.value,
            status=RecordStatus.enabled.value,
        )
        created = self.repository.create(owner)
        token = self._issue_token(created)
        self.repository.commit()

        logger.info(f"Owner {created.id} registered")
        return AuthResponse(token=token, owner=self._to_response_model(created))

    def login(self, data: LoginRequest) -> AuthResponse:
        """
        Authenticate with email and password.

        Raises:
            ValidationException: Wrong credentials (reported on the email field)
            ForbiddenException: The account is disabled
        """
        owner = self.repository.find_by_email(data.email)
        if not owner or not verify_password(owner.password_salt, owner.password_hash, data.password):
            logger.info(f"Failed login for {data.email}")
            raise ValidationException(message="Las credenciales son incorrectas", field="email")
        if owner.status != RecordStatus.enabled.value:
            raise ForbiddenException(message="La cuenta está deshabilitada")

        token = self._issue_token(owner)
        self.repository.commit()

        logger.info(f"Owner {owner.id} logged in")
        return AuthResponse(token=token, owner=self._to_response_model(owner))

    def logout(self, actor: OwnerORM, jti: str) -> None:
        """Revoke the token used for the current request."""
        self.token_repo.revoke(jti)
        self.token_repo.commit()
        logger.info(f"Owner {actor.id} logged out (token {jti})")

    def current(self, actor: OwnerORM) -> Owner:
        return self._to_response_model(actor)

    def list_owners(self, actor: OwnerORM) -> List[OwnerSummary]:
        """Enabled accounts (minimal projection); superadmin only."""
        policies.ensure(policies.can_manage_accounts(actor.role))
        owners = self.repository.get_all_ordered(include_disabled=False)
        return [OwnerSummary(id=o.id, name=o.name, email=o.email) for o in owners]

    def list_veterinarians(self) -> List[OwnerSummary]:
        """Enabled veterinarians ordered by name."""
        vets = self.repository.find_by_role(Role.veterinarian.value)
        return [OwnerSummary(id=v.id, name=v.name, email=v.email) for v in vets]

    # ==================== Profile ====================

    def get_profile(self, actor: OwnerORM) -> OwnerWithPets:
        pets = self.pet_repo.find_by_owner(actor.id)
        return OwnerWithPets(
            **self._to_response_dict(actor),
            pets=[Pet(**pet_to_dict(pet, self.storage)) for pet in pets],
        )

    def update_profile(self, actor: OwnerORM, data: ProfileUpdate) -> Owner:
        """
        Update name, email, address and phone of the current account.

        Raises:
            DuplicateException: If the new email belongs to another account
        """
        self._ensure_email_available(data.email, exclude_id=actor.id)
        for field, value in data.model_dump().items():
            setattr(actor, field, value)
        updated = self.repository.update(actor, user_id=actor.id)
        self.repository.commit()
        logger.info(f"Profile of {actor.id} updated")
        return self._to_response_model(updated)

    def update_profile_photo(self, actor: OwnerORM, photo: PhotoUpload) -> Owner:
        """
        Replace the profile photo: write new, commit, then delete old.
        """
        old_ref = actor.photo_path
        new_ref = self.storage.save(photo, PROFILE_PHOTO_FOLDER)
        try:
            actor.photo_path = new_ref
            updated = self.repository.update(actor, user_id=actor.id)
            self.repository.commit()
        except AppException:
            self.storage.delete(new_ref)
            raise

        if old_ref and old_ref != new_ref:
            self.storage.delete(old_ref)

        logger.info(f"Profile photo of {actor.id} replaced")
        return self._to_response_model(updated)

    def disable_self(self, actor: OwnerORM) -> None:
        """Disable the current account (pets and tokens included)."""
        self._disable_account(actor, by_user_id=actor.id)
        self.repository.commit()

    # ==================== Account management (/users) ====================

    def list_users(self, actor: OwnerORM) -> List[Owner]:
        policies.ensure(policies.can_manage_accounts(actor.role))
        return [self._to_response_model(o) for o in self.repository.get_all_ordered()]

    def get_user(self, actor: OwnerORM, user_id: str) -> Owner:
        policies.ensure(policies.can_manage_accounts(actor.role))
        return self._to_response_model(self.get_by_id_or_fail(user_id))

    def create_user(self, actor: OwnerORM, data: UserCreate) -> Owner:
        """
        Create an account of any role.

        Raises:
            ForbiddenException: If the actor is not superadmin
            DuplicateException: If the email is already in use
        """
        policies.ensure(policies.can_manage_accounts(actor.role))
        self._ensure_email_available(data.email)

        salt, pwd_hash = hash_password(data.password)
        owner = OwnerORM(
            name=data.name,
            email=data.email,
            password_salt=salt,
            password_hash=pwd_hash,
            address=data.address,
            phone=data.phone,
            role=enum_to_value(data.role),
            status=enum_to_value(data.status or RecordStatus.enabled),
        )
        created = self.repository.create(owner, user_id=actor.id)
        self.repository.commit()

        logger.info(f"Account {created.id} ({created.role}) created by {actor.id}")
        return self._to_response_model(created)

    def update_user(self, actor: OwnerORM, user_id: str, data: UserUpdate) -> Owner:
        """
        Replace the fields of an account; the password only changes when sent.
        Setting status to disabled behaves like a delete (cascade + revocation).
        """
        policies.ensure(policies.can_manage_accounts(actor.role))
        owner = self.get_by_id_or_fail(user_id)
        self._ensure_email_available(data.email, exclude_id=owner.id)

        new_status = enum_to_value(data.status)
        if new_status == RecordStatus.disabled.value and owner.id == actor.id:
            raise ValidationException(message="No puede deshabilitar su propia cuenta", field="status")

        owner.name = data.name
        owner.email = data.email
        owner.phone = data.phone
        owner.address = data.address
        owner.role = enum_to_value(data.role)
        if data.password:
            owner.password_salt, owner.password_hash = hash_password(data.password)

        if new_status == RecordStatus.disabled.value:
            self._disable_account(owner, by_user_id=actor.id)
        elif owner.status != RecordStatus.enabled.value:
            enable_record(owner, actor.id)

        updated = self.repository.update(owner, user_id=actor.id)
        self.repository.commit()

        logger.info(f"Account {user_id} updated by {actor.id}")
        return self._to_response_model(updated)

    def disable_user(self, actor: OwnerORM, user_id: str) -> Owner:
        """
        Disable an account (the /users DELETE).

        Raises:
            ValidationException: If the superadmin targets their own account
        """
        policies.ensure(policies.can_manage_accounts(actor.role))
        owner = self.get_by_id_or_fail(user_id)
        if owner.id == actor.id:
            raise ValidationException(message="No puede deshabilitar su propia cuenta", field="id")

        self._disable_account(owner, by_user_id=actor.id)
        self.repository.commit()
        return self._to_response_model(owner)

    # ==================== helpers ====================

    def _disable_account(self, owner: OwnerORM, by_user_id: str) -> None:
        changed = self.repository.disable(owner, user_id=by_user_id)
        pets = self.pet_repo.disable_by_owner(owner.id, user_id=by_user_id)
        tokens = self.token_repo.revoke_all_for_owner(owner.id)
        logger.info(
            f"Account {owner.id} disabled by {by_user_id} "
            f"(changed={changed}, pets={pets}, tokens revoked={tokens})"
        )

    def _issue_token(self, owner: OwnerORM) -> str:
        return create_access_token(
            data={"sub": owner.id, "role": owner.role},
            db=self.repository.db
        )

    def _ensure_email_available(self, email: str, exclude_id: Optional[str] = None) -> None:
        if self.repository.exists_email(email, exclude_id=exclude_id):
            raise DuplicateException(resource="Usuario", field="email", value=email)

    def _to_response_model(self, owner: OwnerORM) -> Owner:
        return Owner(**self._to_response_dict(owner))

    def _to_response_dict(self, owner: OwnerORM) -> Dict[str, Any]:
        return {
            "id": owner.id,
            "name": owner.name,
            "email": owner.email,
            "address": owner.address,
            "phone": owner.phone,
            "role": owner.role,
            "status": owner.status,
            "photo_path": owner.photo_path,
            "photo_url": self.storage.url_for(owner.photo_path),
            "created_at": owner.created_at,
        }
