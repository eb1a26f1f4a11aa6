"""
cloudops_credentials.credentials.backend

Secret backend boundary used by the credentials core.

Responsibilities:
- Define the two narrow capability groups the core needs: logical key/value
  operations and ACL policy management.
- Define the value returned by logical operations.

Test doubles implement only the protocol a component needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class BackendSecret:
    # `data` is the operation payload; `auth` is set only by login endpoints.
    data: dict[str, Any] = field(default_factory=dict)
    auth: dict[str, Any] | None = None


class LogicalBackend(Protocol):
    async def read(self, path: str) -> BackendSecret | None: ...

    async def write(self, path: str, data: dict[str, Any]) -> BackendSecret | None: ...

    async def delete(self, path: str) -> BackendSecret | None: ...

    async def list(self, path: str) -> BackendSecret | None: ...


class PolicyBackend(Protocol):
    async def put_policy(self, name: str, rules: str) -> None: ...

    async def delete_policy(self, name: str) -> None: ...


# --- Module Notes -----------------------------------------------------------
# A `None` result means the backend has nothing at that path. Implementations
# raise `BackendError` for every other failure.
