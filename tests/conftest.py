"""
tests.conftest

Shared fixtures and in-memory backend doubles.

Responsibilities:
- `InMemoryVault`: a small model of the AppRole, AWS roles and ACL policy
  endpoints the credentials core talks to.
- `Tripwire`: a backend that fails the test if any operation is attempted.
"""

from __future__ import annotations

import itertools
from typing import Any

import pytest

from cloudops_credentials.credentials.authorization import Authorization, parse_authorization
from cloudops_credentials.credentials.backend import BackendSecret
from cloudops_credentials.credentials.errors import BackendError
from cloudops_credentials.credentials.naming import APPROLE_PREFIX, LOGIN_PATH
from cloudops_credentials.credentials.provider import VaultProvider

ADMIN_SECRET = "s3cr3t-admin"


class InMemoryVault:
    def __init__(self) -> None:
        self.entries: dict[str, dict[str, Any]] = {}
        self.policies: dict[str, str] = {}
        self.role_ids: dict[str, str] = {}
        self.secret_ids: dict[str, str] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], BackendError] = {}
        self._ids = itertools.count(1)

    def fail(self, operation: str, path: str, *errors: str) -> None:
        self.failures[(operation, path)] = BackendError(
            operation=operation, path=path, errors=list(errors) or ["permission denied"]
        )

    def _record(self, operation: str, path: str) -> None:
        self.calls.append((operation, path))
        if (operation, path) in self.failures:
            raise self.failures[(operation, path)]

    async def read(self, path: str) -> BackendSecret | None:
        self._record("read", path)
        if path.endswith("/role-id"):
            role = path.removesuffix("/role-id")
            if role not in self.role_ids:
                return None
            return BackendSecret(data={"role_id": self.role_ids[role]})
        if path not in self.entries:
            return None
        return BackendSecret(data=dict(self.entries[path]))

    async def write(self, path: str, data: dict[str, Any]) -> BackendSecret | None:
        self._record("write", path)
        if path == LOGIN_PATH:
            return self._login(data)
        if path.endswith("/secret-id"):
            role = path.removesuffix("/secret-id")
            self.secret_ids[role] = f"secret-{next(self._ids)}"
            return BackendSecret(data={"secret_id": self.secret_ids[role]})
        self.entries[path] = dict(data)
        if path.startswith(f"{APPROLE_PREFIX}/"):
            self.role_ids.setdefault(path, f"role-{next(self._ids)}")
        return None

    async def delete(self, path: str) -> BackendSecret | None:
        self._record("delete", path)
        self.entries.pop(path, None)
        self.role_ids.pop(path, None)
        self.secret_ids.pop(path, None)
        return None

    async def list(self, path: str) -> BackendSecret | None:
        self._record("list", path)
        keys = [p.removeprefix(path) for p in self.entries if p.startswith(path)]
        if not keys:
            return None
        return BackendSecret(data={"keys": keys})

    async def put_policy(self, name: str, rules: str) -> None:
        self._record("put_policy", name)
        self.policies[name] = rules

    async def delete_policy(self, name: str) -> None:
        self._record("delete_policy", name)
        self.policies.pop(name, None)

    async def health(self) -> dict[str, Any]:
        return {"initialized": True, "sealed": False, "standby": False, "version": "test"}

    def _login(self, data: dict[str, Any]) -> BackendSecret:
        for role, role_id in self.role_ids.items():
            if role_id == data.get("role_id") and self.secret_ids.get(role) == data.get("secret_id"):
                return BackendSecret(
                    auth={
                        "client_token": f"hvs.token-{next(self._ids)}",
                        "policies": [self.entries[role]["token_policies"]],
                    }
                )
        raise BackendError(
            operation="write", path=LOGIN_PATH, detail="HTTP 400", errors=["invalid role or secret ID"]
        )


class Tripwire:
    async def read(self, path: str) -> BackendSecret | None:
        pytest.fail(f"backend read of {path}")

    async def write(self, path: str, data: dict[str, Any]) -> BackendSecret | None:
        pytest.fail(f"backend write to {path}")

    async def delete(self, path: str) -> BackendSecret | None:
        pytest.fail(f"backend delete of {path}")

    async def list(self, path: str) -> BackendSecret | None:
        pytest.fail(f"backend list of {path}")

    async def put_policy(self, name: str, rules: str) -> None:
        pytest.fail(f"backend put_policy {name}")

    async def delete_policy(self, name: str) -> None:
        pytest.fail(f"backend delete_policy {name}")


@pytest.fixture
def vault() -> InMemoryVault:
    return InMemoryVault()


@pytest.fixture
def tripwire() -> Tripwire:
    return Tripwire()


@pytest.fixture
def admin_secret() -> str:
    return ADMIN_SECRET


@pytest.fixture
def admin_auth() -> Authorization:
    return parse_authorization(f"vault:admin:{ADMIN_SECRET}")


@pytest.fixture
def admin(vault: InMemoryVault, admin_auth: Authorization) -> VaultProvider:
    return VaultProvider(admin_auth, logical=vault, policies=vault, admin_secret=ADMIN_SECRET)


def tenant_provider(vault: Any, role_id: str, secret_id: str) -> VaultProvider:
    auth = parse_authorization(f"vault:{role_id}:{secret_id}")
    return VaultProvider(auth, logical=vault, policies=vault, admin_secret=ADMIN_SECRET)


@pytest.fixture
def make_tenant():
    return tenant_provider


# --- Module Notes -----------------------------------------------------------
# InMemoryVault answers login only for pairs it issued, which lets tests check
# that a token carries the issuing project's policy.
