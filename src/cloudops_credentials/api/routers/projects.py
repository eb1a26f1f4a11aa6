"""
cloudops_credentials.api.routers.projects

Project lifecycle endpoints (admin credentials only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cloudops_credentials.api.deps import provider_dep
from cloudops_credentials.credentials.models import CreateProjectRequest, ProjectDescriptor
from cloudops_credentials.credentials.provider import Provider

router = APIRouter(prefix="/v1/projects", tags=["projects"])


class CreateProjectResponse(BaseModel):
    name: str
    role_id: str
    secret_id: str


@router.post("", response_model=CreateProjectResponse)
async def create_project(
    body: CreateProjectRequest,
    provider: Provider = Depends(provider_dep),
) -> CreateProjectResponse:
    creds = await provider.create_project(body.name)
    return CreateProjectResponse(name=body.name, role_id=creds.role_id, secret_id=creds.secret_id)


@router.get("/{project}", response_model=ProjectDescriptor)
async def get_project(
    project: str,
    provider: Provider = Depends(provider_dep),
) -> ProjectDescriptor:
    return await provider.get_project(project)


@router.delete("/{project}")
async def delete_project(
    project: str,
    provider: Provider = Depends(provider_dep),
) -> dict[str, str]:
    await provider.delete_project(project)
    return {"status": "deleted"}
