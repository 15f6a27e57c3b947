"""
API v1 routes.

Defines REST endpoints for the user registration API.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service, get_store
from src.api.models import (
    AccountData,
    ApiResponse,
    FieldErrorModel,
    HealthData,
    HealthStats,
    RegisterRequest,
)
from src.domain.models import Created, EmailTaken, StorageError, ValidationFailed
from src.domain.ports import AccountStore
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])

EMAIL_TAKEN_ERROR = FieldErrorModel(field="email", message="This email is already in use")
SERVER_ERROR = FieldErrorModel(field="server", message="An unexpected error occurred")


def server_error_response() -> JSONResponse:
    """Generic 500 envelope. The cause is never sent to the client."""
    body = ApiResponse(success=False, message="Internal server error", errors=[SERVER_ERROR])
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.to_content()
    )


@router.post(
    "/register",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ApiResponse, "description": "Validation failed"},
        409: {"model": ApiResponse, "description": "Email already registered"},
        500: {"model": ApiResponse, "description": "Storage failure"},
    },
    summary="Register a new user",
    description="Submit email, name and password. All field errors are "
    "reported together in a single 400 response.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> JSONResponse:
    """
    Register a new user account.

    - **email**: Email address (unique, case-insensitive)
    - **name**: Display name (letters, spaces, hyphens, apostrophes)
    - **password**: Password (8-128 characters, mixed classes)
    """
    outcome = service.register(request_data.to_payload())

    match outcome:
        case Created(account=account):
            body = ApiResponse(
                success=True,
                message="User registered successfully",
                data=AccountData.from_domain(account),
            )
            return JSONResponse(status_code=status.HTTP_201_CREATED, content=body.to_content())
        case ValidationFailed(errors=errors):
            body = ApiResponse(
                success=False,
                message="Validation failed",
                errors=[FieldErrorModel.from_domain(error) for error in errors],
            )
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST, content=body.to_content()
            )
        case EmailTaken():
            body = ApiResponse(
                success=False,
                message="Email already registered",
                errors=[EMAIL_TAKEN_ERROR],
            )
            return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=body.to_content())
        case StorageError(cause=cause):
            logger.error("Registration storage failure: %s", cause, exc_info=cause)
            return server_error_response()


@router.get(
    "/health",
    response_model=ApiResponse,
    summary="Service health and store statistics",
)
def health_check(store: AccountStore = Depends(get_store)) -> JSONResponse:
    """
    Health check endpoint with store statistics.

    Read-only: reports the current account count.
    """
    stats = store.stats()
    body = ApiResponse(
        success=True,
        message="API is healthy",
        data=HealthData(
            status="operational",
            timestamp=datetime.now(timezone.utc),
            stats=HealthStats(total_accounts=stats.total_accounts),
        ),
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.to_content())
