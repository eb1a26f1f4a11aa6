"""
cloudops_credentials.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) backed by Vault's health endpoint.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from cloudops_credentials.api.deps import vault_client
from cloudops_credentials.vault.client import VaultClient

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(vault: VaultClient = Depends(vault_client)) -> dict[str, Any]:
    # Raises BackendError (mapped to 502) when Vault is sealed or unreachable.
    return {"status": "ready", "vault": await vault.health()}
