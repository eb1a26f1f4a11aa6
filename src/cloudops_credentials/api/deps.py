"""
cloudops_credentials.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide settings and the shared Vault client from app.state.
- Parse the caller's Authorization header.
- Build a single-caller Provider per request.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, Header, Request

from cloudops_credentials.credentials.authorization import Authorization, parse_authorization
from cloudops_credentials.credentials.errors import MalformedAuthorization
from cloudops_credentials.credentials.provider import Provider
from cloudops_credentials.settings import Settings, get_settings
from cloudops_credentials.vault.client import VaultClient


def settings_dep(request: Request) -> Settings:
    # Set by `create_app`; falls back to the env-driven settings.
    return getattr(request.app.state, "settings", None) or get_settings()


def vault_client(request: Request) -> VaultClient:
    # Created on app startup in `cloudops_credentials.api.app.create_app`.
    return request.app.state.vault  # type: ignore[attr-defined]


def authorization_dep(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(settings_dep),
) -> Authorization:
    if not authorization:
        raise MalformedAuthorization("missing authorization header")
    return parse_authorization(authorization, admin_keys=settings.admin_keys)


def provider_factory(request: Request) -> Callable[[Authorization], Provider]:
    # Built once in the app lifespan from the shared Vault client and settings.
    return request.app.state.provider_factory  # type: ignore[attr-defined]


def provider_dep(
    authorization: Authorization = Depends(authorization_dep),
    build: Callable[[Authorization], Provider] = Depends(provider_factory),
) -> Provider:
    return build(authorization)


# --- Module Notes -----------------------------------------------------------
# Tests inject an in-memory backend through `create_app(vault=...)`.
