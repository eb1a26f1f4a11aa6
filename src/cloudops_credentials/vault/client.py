"""
cloudops_credentials.vault.client

HTTP client boundary to HashiCorp Vault.

Responsibilities:
- Implement `LogicalBackend` and `PolicyBackend` over Vault's HTTP API.
- Map "nothing at this path" to `None` and every other failure to `BackendError`.
- Probe Vault health for readiness checks.
"""

from __future__ import annotations

from typing import Any

import httpx

from cloudops_credentials.credentials.backend import BackendSecret
from cloudops_credentials.credentials.errors import BackendError, DecodeError
from cloudops_credentials.settings import Settings

POLICY_PREFIX = "sys/policies/acl"
HEALTH_PATH = "sys/health"

# 429: unsealed standby, 473: performance standby. Both can serve reads.
_HEALTHY_STATUSES = frozenset({200, 429, 473})


class VaultClient:
    """
    Thin async wrapper; one instance (and one connection pool) per process.

    No retries: every failure is returned to the caller immediately.
    """

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        token: str,
        namespace: str | None = None,
    ) -> None:
        self._http = http
        self._token = token
        self._namespace = namespace

    @classmethod
    def from_settings(cls, settings: Settings) -> VaultClient:
        http = httpx.AsyncClient(
            base_url=settings.vault_addr.rstrip("/"),
            timeout=settings.vault_timeout_seconds,
        )
        return cls(http=http, token=settings.vault_token, namespace=settings.vault_namespace)

    async def aclose(self) -> None:
        await self._http.aclose()

    # LogicalBackend

    async def read(self, path: str) -> BackendSecret | None:
        r = await self._send("GET", path, operation="read", missing_ok=True)
        return self._secret(r, operation="read", path=path)

    async def write(self, path: str, data: dict[str, Any]) -> BackendSecret | None:
        r = await self._send("POST", path, operation="write", json=data)
        return self._secret(r, operation="write", path=path)

    async def delete(self, path: str) -> BackendSecret | None:
        r = await self._send("DELETE", path, operation="delete", missing_ok=True)
        return self._secret(r, operation="delete", path=path)

    async def list(self, path: str) -> BackendSecret | None:
        # Vault answers an empty listing with 404.
        r = await self._send(
            "GET", path, operation="list", params={"list": "true"}, missing_ok=True
        )
        return self._secret(r, operation="list", path=path)

    # PolicyBackend

    async def put_policy(self, name: str, rules: str) -> None:
        await self._send(
            "PUT", f"{POLICY_PREFIX}/{name}", operation="put policy", json={"policy": rules}
        )

    async def delete_policy(self, name: str) -> None:
        await self._send(
            "DELETE", f"{POLICY_PREFIX}/{name}", operation="delete policy", missing_ok=True
        )

    async def health(self) -> dict[str, Any]:
        try:
            r = await self._http.get(f"/v1/{HEALTH_PATH}", headers=self._headers())
        except httpx.HTTPError as e:
            raise BackendError(operation="health", path=HEALTH_PATH, detail=type(e).__name__) from e
        if r.status_code not in _HEALTHY_STATUSES:
            raise BackendError(operation="health", path=HEALTH_PATH, detail=f"HTTP {r.status_code}")
        try:
            body = r.json()
        except ValueError as e:
            raise BackendError(operation="health", path=HEALTH_PATH, detail="body is not JSON") from e
        if not isinstance(body, dict):
            raise BackendError(operation="health", path=HEALTH_PATH, detail="body is not an object")
        return {k: body.get(k) for k in ("initialized", "sealed", "standby", "version")}

    def _headers(self) -> dict[str, str]:
        headers = {"X-Vault-Token": self._token, "X-Vault-Request": "true"}
        if self._namespace:
            headers["X-Vault-Namespace"] = self._namespace
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        missing_ok: bool = False,
    ) -> httpx.Response | None:
        try:
            r = await self._http.request(
                method,
                f"/v1/{path.strip('/')}",
                headers=self._headers(),
                json=json,
                params=params,
            )
        except httpx.HTTPError as e:
            # Exception text can echo request details; keep only the type.
            raise BackendError(operation=operation, path=path, detail=type(e).__name__) from e

        if r.status_code == 404 and missing_ok:
            return None
        if r.is_error:
            raise BackendError(
                operation=operation,
                path=path,
                detail=f"HTTP {r.status_code}",
                errors=_vault_errors(r),
            )
        if r.status_code == 204 or not r.content:
            return None
        return r

    @staticmethod
    def _secret(r: httpx.Response | None, *, operation: str, path: str) -> BackendSecret | None:
        if r is None:
            return None
        try:
            body = r.json()
        except ValueError as e:
            raise DecodeError(operation=operation, path=path, detail="body is not JSON") from e
        if not isinstance(body, dict):
            raise DecodeError(operation=operation, path=path, detail="body is not an object")
        return BackendSecret(data=body.get("data") or {}, auth=body.get("auth"))


def _vault_errors(r: httpx.Response) -> list[str]:
    try:
        body = r.json()
    except ValueError:
        return []
    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, list):
        return []
    return [str(e) for e in errors]


# --- Module Notes -----------------------------------------------------------
# The same Vault token is used for admin operations and for AppRole logins; the
# login endpoint authenticates the role/secret pair in the request body.
