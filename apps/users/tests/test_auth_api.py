"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "email": "member@example.com",
            "first_name": "Sam",
            "last_name": "Lee",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], "member")
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_register_rejects_duplicate_email_and_mismatch(self) -> None:
        User.objects.create_user(email="taken@example.com", password="StrongPass123")

        duplicate = self.client.post(
            reverse("auth:register"),
            {"email": "TAKEN@example.com", "password": "StrongPass123", "password_confirm": "StrongPass123"},
            format="json",
        )
        mismatch = self.client.post(
            reverse("auth:register"),
            {"email": "new@example.com", "password": "StrongPass123", "password_confirm": "OtherPass123"},
            format="json",
        )

        self.assertEqual(duplicate.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", duplicate.data)
        self.assertEqual(mismatch.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", mismatch.data)

    def test_login_and_refresh(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1")

        wrong = self.client.post(
            reverse("auth:login"), {"email": "login@example.com", "password": "wrong"}, format="json"
        )
        self.assertEqual(wrong.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(
            reverse("auth:login"), {"email": "login@example.com", "password": "CorrectPassword1"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        refreshed = self.client.post(
            reverse("auth:token_refresh"), {"refresh": response.data["tokens"]["refresh"]}, format="json"
        )
        self.assertEqual(refreshed.status_code, status.HTTP_200_OK, refreshed.data)
        self.assertIn("access", refreshed.data)

    def test_access_token_authenticates_api_calls(self) -> None:
        User.objects.create_user(email="jwt@example.com", password="CorrectPassword1")
        tokens = self.client.post(
            reverse("auth:login"), {"email": "jwt@example.com", "password": "CorrectPassword1"}, format="json"
        ).data["tokens"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["email"], "jwt@example.com")

    def test_profile_update_keeps_role(self) -> None:
        user = User.objects.create_user(email="me@example.com", password="CorrectPassword1")
        self.client.force_authenticate(user)

        response = self.client.patch(reverse("user-me"), {"location": "Almaty", "role": "admin"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user.refresh_from_db()
        self.assertEqual(user.location, "Almaty")
        self.assertEqual(user.role, User.RoleChoices.MEMBER)
