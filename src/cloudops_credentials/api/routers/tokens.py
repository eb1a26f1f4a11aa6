"""
cloudops_credentials.api.routers.tokens

Token exchange endpoint.

Responsibilities:
- Exchange a tenant's AppRole pair (from the Authorization header) for a
  short-lived Vault token scoped to its project.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cloudops_credentials.api.deps import provider_dep
from cloudops_credentials.credentials.provider import Provider

router = APIRouter(prefix="/v1/token", tags=["tokens"])


class TokenResponse(BaseModel):
    token: str


@router.post("", response_model=TokenResponse)
async def issue_token(provider: Provider = Depends(provider_dep)) -> TokenResponse:
    # Tenant credentials only; the token is scoped to the caller's project policy.
    return TokenResponse(token=await provider.get_token())
