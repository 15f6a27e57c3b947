"""
Unit tests for API request/response models.

Tests Pydantic decoding of registration bodies and envelope serialization.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.api.models import (
    AccountData,
    ApiResponse,
    FieldErrorModel,
    HealthData,
    HealthStats,
    RegisterRequest,
)
from src.domain.models import Account, FieldError, RegistrationPayload

ACCOUNT = Account(
    id="acc-1",
    email="user@example.com",
    name="Jane Doe",
    password_hash="$2b$10$secret",
    created_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
)


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_fields_passed_through_unvalidated(self) -> None:
        """Rule checks are left to the domain validator."""
        request = RegisterRequest(email="bad", name="A", password="short")
        assert request.to_payload() == RegistrationPayload(
            email="bad", name="A", password="short"
        )

    def test_missing_fields_default_to_empty(self) -> None:
        """Missing fields decode as empty strings."""
        assert RegisterRequest().to_payload() == RegistrationPayload("", "", "")

    def test_null_fields_become_empty(self) -> None:
        """Explicit nulls decode as empty strings."""
        request = RegisterRequest.model_validate(
            {"email": None, "name": None, "password": None}
        )
        assert request.to_payload() == RegistrationPayload("", "", "")

    def test_scalar_fields_are_stringified(self) -> None:
        """Numbers are coerced to text rather than rejected."""
        request = RegisterRequest.model_validate({"email": 1, "name": 2.5, "password": True})
        assert request.email == "1"
        assert request.name == "2.5"
        assert request.password == "True"

    def test_nested_values_rejected(self) -> None:
        """Objects and lists cannot be decoded into a field."""
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest.model_validate({"email": {"x": 1}})
        assert "email" in str(exc_info.value)


class TestAccountData:
    """Tests for AccountData model."""

    def test_from_domain_excludes_password_hash(self) -> None:
        data = AccountData.from_domain(ACCOUNT).model_dump(mode="json", by_alias=True)
        assert data == {
            "id": "acc-1",
            "email": "user@example.com",
            "name": "Jane Doe",
            "createdAt": "2026-01-02T03:04:05Z",
        }


class TestApiResponse:
    """Tests for ApiResponse envelope."""

    def test_error_envelope_drops_empty_data(self) -> None:
        response = ApiResponse(
            success=False,
            message="Validation failed",
            errors=[FieldErrorModel.from_domain(FieldError("email", "Email is required"))],
        )
        assert response.to_content() == {
            "success": False,
            "message": "Validation failed",
            "errors": [{"field": "email", "message": "Email is required"}],
        }

    def test_success_envelope_uses_camel_case(self) -> None:
        response = ApiResponse(success=True, data=AccountData.from_domain(ACCOUNT))
        content = response.to_content()
        assert "errors" not in content
        assert content["data"]["createdAt"] == "2026-01-02T03:04:05Z"

    def test_health_envelope(self) -> None:
        response = ApiResponse(
            success=True,
            message="API is healthy",
            data=HealthData(
                status="operational",
                timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
                stats=HealthStats(total_accounts=3),
            ),
        )
        assert response.to_content()["data"] == {
            "status": "operational",
            "timestamp": "2026-01-01T00:00:00Z",
            "stats": {"totalUsers": 3},
        }
