"""
API request and response models.

Pydantic models for FastAPI endpoint decoding and OpenAPI schema generation.
Field rules are not enforced here; the domain validator reports them as
field errors so the client gets the complete list in one response.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.domain.models import Account, FieldError, RegistrationPayload


class RegisterRequest(BaseModel):
    """Request model for user registration. Missing fields decode as ""."""

    email: str = ""
    name: str = ""
    password: str = ""

    @field_validator("email", "name", "password", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (str, int, float, bool)):
            return str(value)
        raise ValueError("must be a string")

    def to_payload(self) -> RegistrationPayload:
        return RegistrationPayload.from_mapping(self.model_dump())


class FieldErrorModel(BaseModel):
    """One field-level error."""

    field: str
    message: str

    @classmethod
    def from_domain(cls, error: FieldError) -> "FieldErrorModel":
        return cls(field=error.field, message=error.message)


class AccountData(BaseModel):
    """Public view of a created account. Never carries the password hash."""

    id: str
    email: str
    name: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_domain(cls, account: Account) -> "AccountData":
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            created_at=account.created_at,
        )


class HealthStats(BaseModel):
    total_accounts: int = Field(serialization_alias="totalUsers")


class HealthData(BaseModel):
    status: str
    timestamp: datetime
    stats: HealthStats


class ApiResponse(BaseModel):
    """Standard response envelope for every endpoint."""

    success: bool
    message: str | None = None
    data: AccountData | HealthData | None = None
    errors: list[FieldErrorModel] | None = None

    def to_content(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase aliases and empty keys dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
