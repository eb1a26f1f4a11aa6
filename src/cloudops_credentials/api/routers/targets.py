"""
cloudops_credentials.api.routers.targets

Target endpoints nested under a project (admin credentials only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cloudops_credentials.api.deps import provider_dep
from cloudops_credentials.credentials.errors import NotFound
from cloudops_credentials.credentials.models import CreateTargetRequest, TargetProperties
from cloudops_credentials.credentials.provider import Provider

router = APIRouter(prefix="/v1/projects/{project}/targets", tags=["targets"])


@router.post("", response_model=CreateTargetRequest)
async def create_target(
    project: str,
    body: CreateTargetRequest,
    provider: Provider = Depends(provider_dep),
) -> CreateTargetRequest:
    if not await provider.project_exists(project):
        raise NotFound(f"project {project} not found")
    await provider.create_target(project, body)
    return body


@router.get("", response_model=list[str])
async def list_targets(
    project: str,
    provider: Provider = Depends(provider_dep),
) -> list[str]:
    return await provider.list_targets(project)


@router.get("/{target}", response_model=TargetProperties)
async def get_target(
    project: str,
    target: str,
    provider: Provider = Depends(provider_dep),
) -> TargetProperties:
    return await provider.get_target(project, target)


@router.delete("/{target}")
async def delete_target(
    project: str,
    target: str,
    provider: Provider = Depends(provider_dep),
) -> dict[str, str]:
    await provider.delete_target(project, target)
    return {"status": "deleted"}
