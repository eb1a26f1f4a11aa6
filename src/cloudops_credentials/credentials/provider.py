"""
cloudops_credentials.credentials.provider

Credential provider facade.

Responsibilities:
- Define the `Provider` capability set consumed by the API layer.
- Bind one caller's parsed credentials and gate every operation on them:
  project/target lifecycle requires an authorized admin, token exchange
  requires tenant credentials.

A provider is built per request for a single caller and must not be shared.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from cloudops_credentials.credentials import naming
from cloudops_credentials.credentials.authorization import Authorization, is_authorized_admin
from cloudops_credentials.credentials.backend import LogicalBackend, PolicyBackend
from cloudops_credentials.credentials.errors import PermissionDenied
from cloudops_credentials.credentials.models import (
    CreateTargetRequest,
    ProjectCredentials,
    ProjectDescriptor,
    TargetProperties,
)
from cloudops_credentials.credentials.projects import ProjectManager
from cloudops_credentials.credentials.targets import TargetManager
from cloudops_credentials.credentials.tokens import TokenExchanger


class Provider(Protocol):
    async def create_project(self, name: str) -> ProjectCredentials: ...

    async def create_target(self, project_name: str, request: CreateTargetRequest) -> None: ...

    async def delete_project(self, name: str) -> None: ...

    async def delete_target(self, project_name: str, target_name: str) -> None: ...

    async def get_project(self, name: str) -> ProjectDescriptor: ...

    async def get_target(self, project_name: str, target_name: str) -> TargetProperties: ...

    async def get_token(self) -> str: ...

    async def list_targets(self, project_name: str) -> list[str]: ...

    async def project_exists(self, name: str) -> bool: ...

    async def target_exists(self, project_name: str, target_name: str) -> bool: ...


class VaultProvider:
    def __init__(
        self,
        authorization: Authorization,
        *,
        logical: LogicalBackend,
        policies: PolicyBackend,
        admin_secret: str,
        namespace_prefix: str = naming.DEFAULT_NAMESPACE_PREFIX,
    ) -> None:
        self._authorization = authorization
        self._admin_secret = admin_secret
        self._projects = ProjectManager(
            logical=logical, policies=policies, namespace_prefix=namespace_prefix
        )
        self._targets = TargetManager(logical=logical, namespace_prefix=namespace_prefix)
        self._tokens = TokenExchanger(logical=logical)

    def _require_admin(self, action: str) -> None:
        # Checked before any backend I/O.
        if not is_authorized_admin(self._authorization, self._admin_secret):
            raise PermissionDenied(f"admin credentials must be used to {action}")

    async def create_project(self, name: str) -> ProjectCredentials:
        self._require_admin("create project")
        return await self._projects.create(name)

    async def create_target(self, project_name: str, request: CreateTargetRequest) -> None:
        self._require_admin("create target")
        await self._targets.create(project_name, request)

    async def delete_project(self, name: str) -> None:
        self._require_admin("delete project")
        await self._projects.delete(name)

    async def delete_target(self, project_name: str, target_name: str) -> None:
        self._require_admin("delete target")
        await self._targets.delete(project_name, target_name)

    async def get_project(self, name: str) -> ProjectDescriptor:
        self._require_admin("get project information")
        return await self._projects.get(name)

    async def get_target(self, project_name: str, target_name: str) -> TargetProperties:
        self._require_admin("get target information")
        return await self._targets.get(project_name, target_name)

    async def get_token(self) -> str:
        return await self._tokens.exchange(self._authorization)

    async def list_targets(self, project_name: str) -> list[str]:
        self._require_admin("list targets")
        return await self._targets.list(project_name)

    async def project_exists(self, name: str) -> bool:
        self._require_admin("get project information")
        return await self._projects.exists(name)

    async def target_exists(self, project_name: str, target_name: str) -> bool:
        self._require_admin("get target information")
        return await self._targets.exists(project_name, target_name)


def vault_provider_factory(
    logical: LogicalBackend,
    policies: PolicyBackend,
    *,
    admin_secret: str,
    namespace_prefix: str = naming.DEFAULT_NAMESPACE_PREFIX,
) -> Callable[[Authorization], Provider]:
    def build(authorization: Authorization) -> Provider:
        return VaultProvider(
            authorization,
            logical=logical,
            policies=policies,
            admin_secret=admin_secret,
            namespace_prefix=namespace_prefix,
        )

    return build


# --- Module Notes -----------------------------------------------------------
# Admin status is derived from the bound Authorization on every call; nothing is
# re-authorized against the backend, so a provider instance is only as fresh as
# the request that built it.
