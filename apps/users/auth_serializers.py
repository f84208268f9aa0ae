"""Input validation for sign-up and sign-in. Emails compare case-insensitively."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore


User = get_user_model()

INVALID_CREDENTIALS = "Invalid email or password."


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(min_length=8, write_only=True, style={"input_type": "password"})
    password_confirm = serializers.CharField(write_only=True, style={"input_type": "password"})

    class Meta:
        model = User
        fields = ("email", "password", "password_confirm", "username", "first_name", "last_name", "location")
        extra_kwargs = {
            # Replaced by the case-insensitive check in validate_email
            "email": {"validators": []},
        }

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["password"] != attrs.pop("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        return User.objects.create_user(**validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = User.objects.filter(email__iexact=attrs["email"]).first()
        # Same message whether the email or the password is wrong
        if user is None or not user.is_active or not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"email": INVALID_CREDENTIALS})
        attrs["user"] = user
        return attrs
