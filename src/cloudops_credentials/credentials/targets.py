"""
cloudops_credentials.credentials.targets

Target (AWS secrets engine role) lifecycle scoped under a project.

Responsibilities:
- Write, read, list and delete `aws/roles/<prefix>-<project>-target-<name>` entries.
- Decode stored roles into `TargetProperties` through a typed schema.
"""

from __future__ import annotations

from cloudops_credentials.credentials import naming
from cloudops_credentials.credentials.backend import LogicalBackend
from cloudops_credentials.credentials.errors import NotFound
from cloudops_credentials.credentials.models import (
    CreateTargetRequest,
    ListData,
    TargetProperties,
    TargetRoleData,
    decode,
)
from cloudops_credentials.observability.logging import get_logger

log = get_logger(__name__)


class TargetManager:
    def __init__(
        self,
        *,
        logical: LogicalBackend,
        namespace_prefix: str = naming.DEFAULT_NAMESPACE_PREFIX,
    ) -> None:
        self._logical = logical
        self._prefix = namespace_prefix

    # TODO: validate that role_arn and policy_arns are well-formed ARNs before writing.
    async def create(self, project_name: str, request: CreateTargetRequest) -> None:
        naming.validate_name(project_name, kind="project")
        naming.validate_name(request.name, kind="target")
        props = request.properties
        await self._logical.write(
            self._path(project_name, request.name),
            {
                # Stored as a list so the shape matches what `get` reads back.
                "role_arns": [props.role_arn],
                "credential_type": props.credential_type,
                "policy_arns": list(props.policy_arns),
            },
        )
        log.info("target.created", project=project_name, target=request.name)

    async def get(self, project_name: str, target_name: str) -> TargetProperties:
        path = self._path(project_name, target_name)
        sec = await self._logical.read(path)
        if sec is None:
            raise NotFound(f"target {target_name} not found in project {project_name}")
        role = decode(TargetRoleData, sec.data, operation="get target", path=path)
        return role.to_properties()

    async def exists(self, project_name: str, target_name: str) -> bool:
        try:
            await self.get(project_name, target_name)
        except NotFound:
            return False
        return True

    async def list(self, project_name: str) -> list[str]:
        path = f"{naming.AWS_ROLES_PREFIX}/"
        sec = await self._logical.list(path)
        # Always a list, never None, so an empty project renders as [].
        names: list[str] = []
        if sec is None:
            return names

        prefix = naming.target_key_prefix(project_name, namespace_prefix=self._prefix)
        for key in decode(ListData, sec.data, operation="list targets", path=path).keys:
            if key.startswith(prefix):
                names.append(key[len(prefix) :])
        return names

    async def delete(self, project_name: str, target_name: str) -> None:
        # Deleting a missing role succeeds: Vault does not distinguish the two.
        await self._logical.delete(self._path(project_name, target_name))
        log.info("target.deleted", project=project_name, target=target_name)

    def _path(self, project_name: str, target_name: str) -> str:
        return naming.target_path(project_name, target_name, namespace_prefix=self._prefix)
