"""
Test the account page endpoints: profile, usage statistics and updates.
"""
from unittest.mock import patch

import pytest
from fastapi import status
from sqlalchemy.exc import IntegrityError

from easyjob_app.backend.models.db import crud
from easyjob_app.backend.security import get_password_hash, verify_password
from easyjob_app.backend.services.user_stats_service import get_user_stats, record_usage


class TestUsageStats:

    def test_new_user_has_zero_counters(self, test_db_session, test_user):
        stats = get_user_stats(test_db_session, test_user.id)

        assert stats.model_dump() == {
            "projects_polished": 0,
            "cvs_edited": 0,
            "cover_letters_generated": 0,
            "total_tokens_used": 0,
        }

    def test_record_usage_accumulates(self, test_db_session, test_user):
        record_usage(test_db_session, test_user.id, projects_polished=1, tokens_used=100)
        record_usage(test_db_session, test_user.id, cover_letters_generated=1, tokens_used=50)
        record_usage(test_db_session, test_user.id, cvs_edited=1)

        stats = get_user_stats(test_db_session, test_user.id)
        assert stats.projects_polished == 1
        assert stats.cover_letters_generated == 1
        assert stats.cvs_edited == 1
        assert stats.total_tokens_used == 150

    def test_zero_tokens_leave_total_unchanged(self, test_db_session, test_user):
        record_usage(test_db_session, test_user.id, tokens_used=0)

        assert get_user_stats(test_db_session, test_user.id).total_tokens_used == 0

    def test_unknown_user_has_no_stats(self, test_db_session):
        assert get_user_stats(test_db_session, "missing-user") is None


class TestReadProfile:

    def test_read_me(self, test_client, auth_headers, test_user):
        response = test_client.get("/api/user/me", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["user"]["id"] == test_user.id
        assert data["user"]["email"] == "test@example.com"
        assert data["user"]["username"] == "tester"
        assert data["user"]["createdAt"]
        assert data["stats"] == {
            "projectsPolished": 0,
            "cvsEdited": 0,
            "coverLettersGenerated": 0,
            "totalTokensUsed": 0,
        }

    def test_read_me_requires_auth(self, test_client):
        assert test_client.get("/api/user/me").status_code == status.HTTP_401_UNAUTHORIZED


class TestUpdateProfile:

    def test_change_username(self, test_client, auth_headers, test_db_session, test_user):
        response = test_client.put("/api/user/me", json={"username": "  renamed  "}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["user"]["username"] == "renamed"
        test_db_session.refresh(test_user)
        assert test_user.username == "renamed"

    def test_keeping_own_username_allowed(self, test_client, auth_headers):
        response = test_client.put("/api/user/me", json={"username": "tester"}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK

    def test_username_taken_by_other_user(self, test_client, auth_headers, test_db_session):
        crud.create_user(test_db_session, "other@example.com", "taken", get_password_hash("password1"))

        response = test_client.put("/api/user/me", json={"username": "taken"}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "This username has already been used"

    def test_username_length_checked(self, test_client, auth_headers):
        response = test_client.put("/api/user/me", json={"username": "x"}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Username must be between 2 and 20 characters"

    def test_change_password(self, test_client, auth_headers, test_db_session, test_user, test_user_data):
        payload = {"password": test_user_data["password"], "newPassword": "brand-new-pass"}

        response = test_client.put("/api/user/me", json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        test_db_session.refresh(test_user)
        assert verify_password("brand-new-pass", test_user.password_hash)

    def test_wrong_current_password(self, test_client, auth_headers):
        payload = {"password": "not-my-password", "newPassword": "brand-new-pass"}

        response = test_client.put("/api/user/me", json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Current password is incorrect"

    def test_new_password_requires_current(self, test_client, auth_headers):
        response = test_client.put("/api/user/me", json={"newPassword": "brand-new-pass"}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Please provide your current password"

    @pytest.mark.parametrize("new_password,message", [
        ("12345", "New password must be at least 6 characters"),
        ("x" * 73, "Password must be at most 72 bytes"),
    ])
    def test_new_password_rules(self, test_client, auth_headers, test_user_data, new_password, message):
        payload = {"password": test_user_data["password"], "newPassword": new_password}

        response = test_client.put("/api/user/me", json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == message

    def test_empty_update_rejected(self, test_client, auth_headers):
        response = test_client.put("/api/user/me", json={}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Please provide the fields to update"

    def test_update_messages_localized(self, test_client, auth_headers):
        headers = {**auth_headers, "Accept-Language": "zh-CN"}

        response = test_client.put("/api/user/me", json={}, headers=headers)

        assert response.json()["error"] == "请提供要更新的字段"

    def test_username_claimed_concurrently(self, test_client, auth_headers, test_db_session, test_user):
        clash = IntegrityError("UPDATE users", {}, Exception("UNIQUE constraint failed: users.username"))

        with patch("easyjob_app.backend.models.db.crud.update_user", side_effect=clash):
            response = test_client.put("/api/user/me", json={"username": "racer"}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"success": False, "error": "This username has already been used"}
        test_db_session.refresh(test_user)
        assert test_user.username == "tester"
