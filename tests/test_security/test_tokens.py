"""
Tests for token handling.

Tests cover:
- Token creation and standard claims
- Expired and tampered tokens
- Tokens that were never recorded or were revoked
- Role restricted dependencies
"""

import pytest
from datetime import timedelta
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from typing import Dict

from database.models import OwnerORM, AccessTokenORM
from auth import create_access_token, decode_token
from config import settings
from tests.conftest import CLIENT_ID


class TestTokenCreation:

    def test_standard_claims(self):
        token = create_access_token(data={"sub": CLIENT_ID})
        payload = decode_token(token)

        assert payload["sub"] == CLIENT_ID
        assert payload["iss"] == settings.jwt_issuer
        assert payload["aud"] == settings.jwt_audience
        assert payload["jti"]
        assert payload["exp"] > payload["iat"]

    def test_requires_subject(self):
        with pytest.raises(ValueError):
            create_access_token(data={"role": "client"})

    def test_recorded_when_session_given(self, db_session: Session, client_owner: OwnerORM):
        token = create_access_token(data={"sub": CLIENT_ID}, db=db_session)
        db_session.commit()

        row = db_session.get(AccessTokenORM, decode_token(token)["jti"])
        assert row is not None
        assert row.owner_id == CLIENT_ID
        assert row.revoked_at is None


class TestTokenValidation:

    def test_expired_token(self):
        token = create_access_token(data={"sub": CLIENT_ID}, expires_delta=timedelta(seconds=-1))

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    def test_tampered_token(self):
        token = create_access_token(data={"sub": CLIENT_ID})

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))
        assert exc_info.value.status_code == 401

    def test_unrecorded_token_rejected(self, client: TestClient, client_owner: OwnerORM):
        token = create_access_token(data={"sub": CLIENT_ID})

        response = client.get("/owner", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_revoked_token_rejected(
        self,
        client: TestClient,
        db_session: Session,
        client_token: str,
        auth_headers_client: Dict[str, str]
    ):
        row = db_session.get(AccessTokenORM, decode_token(client_token)["jti"])
        row.revoked_at = row.issued_at
        db_session.commit()

        assert client.get("/owner", headers=auth_headers_client).status_code == 401

    def test_disabled_owner_rejected(
        self,
        client: TestClient,
        db_session: Session,
        client_owner: OwnerORM,
        auth_headers_client: Dict[str, str]
    ):
        client_owner.status = "disabled"
        db_session.commit()

        assert client.get("/owner", headers=auth_headers_client).status_code == 401


class TestRoleRestrictions:

    def test_users_requires_superadmin(
        self,
        client: TestClient,
        auth_headers_client: Dict[str, str],
        auth_headers_admin: Dict[str, str]
    ):
        assert client.get("/users", headers=auth_headers_client).status_code == 403
        assert client.get("/users", headers=auth_headers_admin).status_code == 200
