"""
Tests for the authorization policies.

Every policy is evaluated for each role; unknown roles are an error.
"""

import pytest

from core import policies
from core.enums import Role
from core.exceptions import ForbiddenException

ME = "owner-1"
OTHER = "owner-2"


class TestPetPolicies:

    @pytest.mark.parametrize("role,expected", [
        ("client", "own"),
        ("veterinarian", "linked"),
        ("superadmin", "all"),
    ])
    def test_list_scope(self, role, expected):
        assert policies.can_list_pets(role) is True
        assert policies.pet_list_scope(role) == expected

    @pytest.mark.parametrize("role,owner_id,linked,expected", [
        ("client", ME, False, True),
        ("client", OTHER, False, False),
        ("client", OTHER, True, False),
        ("veterinarian", OTHER, True, True),
        ("veterinarian", OTHER, False, False),
        ("superadmin", OTHER, False, True),
    ])
    def test_view(self, role, owner_id, linked, expected):
        assert policies.can_view_pet(role, ME, owner_id, linked_by_consultation=linked) is expected

    @pytest.mark.parametrize("role,target,expected", [
        ("client", None, True),
        ("client", ME, True),
        ("client", OTHER, False),
        ("veterinarian", None, False),
        ("superadmin", OTHER, True),
    ])
    def test_create(self, role, target, expected):
        assert policies.can_create_pet(role, ME, target) is expected

    @pytest.mark.parametrize("check", [policies.can_update_pet, policies.can_disable_pet])
    def test_update_and_disable(self, check):
        assert check("client", ME, ME) is True
        assert check("client", ME, OTHER) is False
        assert check("veterinarian", ME, ME) is False
        assert check("superadmin", ME, OTHER) is True


class TestConsultationPolicies:

    @pytest.mark.parametrize("role,expected", [
        ("client", "client"),
        ("veterinarian", "veterinarian"),
        ("superadmin", "all"),
    ])
    def test_list_scope(self, role, expected):
        assert policies.consultation_list_scope(role) == expected

    def test_view(self):
        assert policies.can_view_consultation("client", ME, ME, OTHER) is True
        assert policies.can_view_consultation("client", ME, OTHER, ME) is False
        assert policies.can_view_consultation("veterinarian", ME, OTHER, ME) is True
        assert policies.can_view_consultation("veterinarian", ME, ME, OTHER) is False
        assert policies.can_view_consultation("superadmin", ME, OTHER, OTHER) is True

    def test_create(self):
        assert policies.can_create_consultation("client") is True
        assert policies.can_create_consultation("veterinarian") is False
        assert policies.can_create_consultation("superadmin") is True

    def test_schedule_for_pet(self):
        assert policies.can_schedule_for_pet("client", ME, ME) is True
        assert policies.can_schedule_for_pet("client", ME, OTHER) is False
        assert policies.can_schedule_for_pet("veterinarian", ME, ME) is False
        assert policies.can_schedule_for_pet("superadmin", ME, OTHER) is True

    def test_update_status(self):
        assert policies.can_update_consultation_status("client", ME, ME) is False
        assert policies.can_update_consultation_status("veterinarian", ME, ME) is True
        assert policies.can_update_consultation_status("veterinarian", ME, OTHER) is False
        assert policies.can_update_consultation_status("veterinarian") is False
        assert policies.can_update_consultation_status("superadmin", ME, OTHER) is True


class TestAccountPolicies:

    @pytest.mark.parametrize("role,expected", [
        (Role.client, False),
        (Role.veterinarian, False),
        (Role.superadmin, True),
    ])
    def test_manage_accounts(self, role, expected):
        assert policies.can_manage_accounts(role) is expected

    def test_unknown_role_is_an_error(self):
        with pytest.raises(ValueError):
            policies.can_manage_accounts("groomer")
        with pytest.raises(ValueError):
            policies.pet_list_scope(None)

    def test_ensure(self):
        policies.ensure(True)
        with pytest.raises(ForbiddenException) as exc_info:
            policies.ensure(False, "No")
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "No"
