"""
cloudops_credentials.api.app

FastAPI app factory for the CloudOps credentials service.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Create and close the shared Vault client and the per-request provider factory.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cloudops_credentials import __version__
from cloudops_credentials.api.errors import register_error_handlers
from cloudops_credentials.api.routers.health import router as health_router
from cloudops_credentials.api.routers.projects import router as projects_router
from cloudops_credentials.api.routers.targets import router as targets_router
from cloudops_credentials.api.routers.tokens import router as tokens_router
from cloudops_credentials.credentials.provider import vault_provider_factory
from cloudops_credentials.observability.logging import configure_logging, get_logger
from cloudops_credentials.observability.middleware import RequestContextMiddleware
from cloudops_credentials.settings import Settings
from cloudops_credentials.vault.client import VaultClient

log = get_logger(__name__)


def create_app(*, settings: Settings, vault: VaultClient | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, vault_addr=settings.vault_addr)
        if not settings.admin_secret:
            log.warning("admin_secret.unset")
        # An injected client (tests) is owned by the caller and not closed here.
        client = vault or VaultClient.from_settings(settings)
        app.state.vault = client
        app.state.provider_factory = vault_provider_factory(
            client,
            client,
            admin_secret=settings.admin_secret,
            namespace_prefix=settings.namespace_prefix,
        )
        try:
            yield
        finally:
            if vault is None:
                await client.aclose()
            log.info("shutdown")

    app = FastAPI(
        lifespan=lifespan,
        title="CloudOps Credentials",
        version=__version__,
        docs_url="/docs" if settings.env != "prod" else None,
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(projects_router)
    app.include_router(targets_router)
    app.include_router(tokens_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Admin operations are refused for every caller while `admin_secret` is unset.
