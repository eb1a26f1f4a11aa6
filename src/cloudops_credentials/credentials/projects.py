"""
cloudops_credentials.credentials.projects

Project lifecycle against the secret backend.

Responsibilities:
- Create a project: ACL policy, AppRole identity, role id, fresh secret id.
- Read, probe and delete a project's AppRole identity and policy.

Create and delete are ordered step sequences without rollback. Each step is
idempotent, so a failed sequence is repaired by re-running it (or by deleting
the project). Callers must serialize lifecycle operations per project name.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from cloudops_credentials.credentials import naming
from cloudops_credentials.credentials.backend import LogicalBackend, PolicyBackend
from cloudops_credentials.credentials.errors import BackendError, CredentialsError, NotFound
from cloudops_credentials.credentials.models import (
    ProjectCredentials,
    ProjectDescriptor,
    RoleIdData,
    SecretIdData,
    decode,
)
from cloudops_credentials.credentials.policy import synthesize_readonly_policy
from cloudops_credentials.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LifecycleStep:
    name: str
    run: Callable[[], Awaitable[None]]


class ProjectManager:
    def __init__(
        self,
        *,
        logical: LogicalBackend,
        policies: PolicyBackend,
        namespace_prefix: str = naming.DEFAULT_NAMESPACE_PREFIX,
    ) -> None:
        self._logical = logical
        self._policies = policies
        self._prefix = namespace_prefix

    async def create(self, name: str) -> ProjectCredentials:
        """
        Create (or re-create) a project and return its durable credential pair.

        Steps: write policy, write AppRole, read role id, force a new secret id.
        The first failing step aborts the sequence; earlier steps are not undone.
        Re-running rotates the secret id.
        """
        naming.validate_name(name, kind="project")
        issued: dict[str, str] = {}

        async def read_role_id() -> None:
            issued["role_id"] = await self._read_role_id(name)

        async def generate_secret_id() -> None:
            issued["secret_id"] = await self._generate_secret_id(name)

        await self._run_steps(
            "create",
            name,
            [
                LifecycleStep("write_policy", lambda: self._write_policy(name)),
                LifecycleStep("write_approle", lambda: self._write_approle(name)),
                LifecycleStep("read_role_id", read_role_id),
                LifecycleStep("generate_secret_id", generate_secret_id),
            ],
        )
        return ProjectCredentials(role_id=issued["role_id"], secret_id=issued["secret_id"])

    async def get(self, name: str) -> ProjectDescriptor:
        sec = await self._logical.read(self._role_path(name))
        if sec is None:
            raise NotFound(f"project {name} not found")
        return ProjectDescriptor(name=name)

    async def exists(self, name: str) -> bool:
        try:
            await self.get(name)
        except NotFound:
            return False
        return True

    async def delete(self, name: str) -> None:
        """Delete the policy, then the AppRole. No rollback if the second step fails."""

        async def delete_policy() -> None:
            await self._policies.delete_policy(self._policy_name(name))

        async def delete_approle() -> None:
            await self._logical.delete(self._role_path(name))

        try:
            await self._run_steps(
                "delete",
                name,
                [
                    LifecycleStep("delete_policy", delete_policy),
                    LifecycleStep("delete_approle", delete_approle),
                ],
            )
        except BackendError as e:
            raise BackendError(
                operation="delete project",
                path=self._role_path(name),
                detail=f"{e.operation} {e.path}",
                errors=e.errors,
            ) from e

    async def _run_steps(self, operation: str, name: str, steps: Sequence[LifecycleStep]) -> None:
        for step in steps:
            try:
                await step.run()
            except CredentialsError:
                log.warning(f"project.{operation}.failed", project=name, step=step.name)
                raise
            log.debug(f"project.{operation}.step", project=name, step=step.name)
        log.info(f"project.{operation}.completed", project=name)

    async def _write_policy(self, name: str) -> None:
        policy = synthesize_readonly_policy(name, namespace_prefix=self._prefix)
        await self._policies.put_policy(self._policy_name(name), policy)

    async def _write_approle(self, name: str) -> None:
        await self._logical.write(
            self._role_path(name),
            {
                "secret_id_ttl": naming.SECRET_ID_TTL,
                "token_max_ttl": naming.TOKEN_MAX_TTL,
                "token_no_default_policy": "true",
                "token_num_uses": naming.TOKEN_NUM_USES,
                "token_policies": self._policy_name(name),
            },
        )

    async def _read_role_id(self, name: str) -> str:
        path = naming.role_id_path(name, namespace_prefix=self._prefix)
        sec = await self._logical.read(path)
        payload = sec.data if sec is not None else None
        return decode(RoleIdData, payload, operation="read role id", path=path).role_id

    async def _generate_secret_id(self, name: str) -> str:
        path = naming.secret_id_path(name, namespace_prefix=self._prefix)
        sec = await self._logical.write(path, {"force": True})
        payload = sec.data if sec is not None else None
        return decode(SecretIdData, payload, operation="generate secret id", path=path).secret_id

    def _role_path(self, name: str) -> str:
        return naming.project_role_path(name, namespace_prefix=self._prefix)

    def _policy_name(self, name: str) -> str:
        return naming.policy_name(name, namespace_prefix=self._prefix)
