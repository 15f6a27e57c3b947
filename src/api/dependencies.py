"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.domain.ports import AccountStore
from src.domain.registration import RegistrationService


def get_store(request: Request) -> AccountStore:
    """
    Get account store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_registration_service(
    store: AccountStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires the account store and security settings into the domain service.
    """
    return RegistrationService(
        store=store,
        bcrypt_cost=settings.bcrypt_cost,
        store_timeout=settings.store_timeout_seconds,
    )
