"""
tests.test_api

HTTP surface end-to-end against the in-memory Vault.

Responsibilities:
- Ensure routes call the right Provider operations.
- Ensure credentials errors map to the documented status codes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from cloudops_credentials.api.app import create_app
from cloudops_credentials.api.errors import status_for
from cloudops_credentials.credentials.errors import InvalidName
from cloudops_credentials.settings import Settings

TARGET = {
    "name": "dev",
    "type": "aws_account",
    "properties": {
        "credential_type": "assumed_role",
        "policy_arns": ["arn:aws:iam::aws:policy/ReadOnlyAccess"],
        "role_arn": "arn:aws:iam::123456789012:role/deployer",
    },
}


@pytest_asyncio.fixture
async def client(vault, admin_secret) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=Settings(env="test", admin_secret=admin_secret), vault=vault)

    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            yield http


@pytest.fixture
def admin_headers(admin_secret) -> dict[str, str]:
    return {"Authorization": f"vault:admin:{admin_secret}"}


@pytest.mark.asyncio
async def test_health_endpoints(client) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["vault"]["sealed"] is False
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_project_and_target_lifecycle(client, admin_headers) -> None:
    r = await client.post("/v1/projects", json={"name": "proj1"}, headers=admin_headers)
    assert r.status_code == 200
    project = r.json()
    assert project["name"] == "proj1"
    assert project["role_id"] and project["secret_id"]

    r = await client.get("/v1/projects/proj1", headers=admin_headers)
    assert r.json() == {"name": "proj1"}

    r = await client.post("/v1/projects/proj1/targets", json=TARGET, headers=admin_headers)
    assert r.status_code == 200

    r = await client.get("/v1/projects/proj1/targets", headers=admin_headers)
    assert r.json() == ["dev"]

    r = await client.get("/v1/projects/proj1/targets/dev", headers=admin_headers)
    assert r.json() == TARGET["properties"]

    r = await client.delete("/v1/projects/proj1/targets/dev", headers=admin_headers)
    assert r.status_code == 200
    r = await client.get("/v1/projects/proj1/targets", headers=admin_headers)
    assert r.json() == []

    r = await client.delete("/v1/projects/proj1", headers=admin_headers)
    assert r.json() == {"status": "deleted"}
    r = await client.get("/v1/projects/proj1", headers=admin_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_target_in_unknown_project_is_404(client, admin_headers) -> None:
    r = await client.post("/v1/projects/ghost/targets", json=TARGET, headers=admin_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_tenant_exchanges_pair_for_token(client, admin_headers) -> None:
    project = (await client.post("/v1/projects", json={"name": "p"}, headers=admin_headers)).json()
    tenant = {"Authorization": f"vault:{project['role_id']}:{project['secret_id']}"}

    r = await client.post("/v1/token", headers=tenant)
    assert r.status_code == 200
    assert r.json()["token"].startswith("hvs.")

    r = await client.get("/v1/projects/p/targets", headers=tenant)
    assert r.status_code == 403

    r = await client.post("/v1/token", headers=admin_headers)
    assert r.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [None, "vault:admin", "vault::x"])
async def test_malformed_authorization_is_401(client, header) -> None:
    headers = {"Authorization": header} if header is not None else {}
    r = await client.get("/v1/projects/p", headers=headers)
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_wrong_admin_secret_is_403(client) -> None:
    r = await client.post("/v1/projects", json={"name": "p"}, headers={"Authorization": "vault:admin:nope"})
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_backend_failure_is_502_without_secrets(client, vault, admin_headers, admin_secret) -> None:
    vault.fail("put_policy", "argo-cloudops-projects-p", "permission denied")

    r = await client.post("/v1/projects", json={"name": "p"}, headers=admin_headers)
    assert r.status_code == 502
    assert "permission denied" in r.json()["detail"]
    assert admin_secret not in r.text


@pytest.mark.asyncio
async def test_rejected_token_exchange_is_502(client) -> None:
    r = await client.post("/v1/token", headers={"Authorization": "vault:role-x:secret-x"})
    assert r.status_code == 502
    assert "invalid role or secret ID" in r.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["a-target-b", 'q" } path "secret/*', "a/b"])
async def test_create_project_with_unsafe_name_is_422(client, vault, admin_headers, name) -> None:
    r = await client.post("/v1/projects", json={"name": name}, headers=admin_headers)
    assert r.status_code == 422
    assert vault.calls == []


@pytest.mark.asyncio
async def test_create_target_with_unsafe_name_is_422(client, admin_headers) -> None:
    await client.post("/v1/projects", json={"name": "proj1"}, headers=admin_headers)
    body = {**TARGET, "name": "dev-target-x"}
    r = await client.post("/v1/projects/proj1/targets", json=body, headers=admin_headers)
    assert r.status_code == 422


def test_invalid_name_error_maps_to_400() -> None:
    assert status_for(InvalidName("invalid project name")) == 400


@pytest.mark.asyncio
async def test_providers_come_from_the_app_factory(vault, admin_secret, admin_headers) -> None:
    app = create_app(settings=Settings(env="test", admin_secret=admin_secret), vault=vault)
    bound: list[str] = []

    async with app.router.lifespan_context(app):
        build = app.state.provider_factory

        def recording(authorization):
            bound.append(authorization.key)
            return build(authorization)

        app.state.provider_factory = recording
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            r = await http.post("/v1/projects", json={"name": "p"}, headers=admin_headers)

    assert r.status_code == 200
    assert bound == ["admin"]
    assert "argo-cloudops-projects-p" in vault.policies
