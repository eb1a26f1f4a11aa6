"""
cloudops_credentials.api.__main__

Process entrypoint for the credentials API.

Responsibilities:
- Refuse to start in prod without an admin secret or a Vault token.
- Serve the app with uvicorn, leaving log formatting to structlog.

Invoked as `python -m cloudops_credentials.api` or via the `cloudops-credentials`
console script.
"""

from __future__ import annotations

import sys

import uvicorn

from cloudops_credentials.api.app import create_app
from cloudops_credentials.settings import Settings, get_settings


def missing_prod_settings(settings: Settings) -> list[str]:
    if settings.env != "prod":
        return []
    missing = []
    if not settings.admin_secret:
        missing.append("CLOUDOPS_ADMIN_SECRET")
    if not settings.vault_token:
        missing.append("CLOUDOPS_VAULT_TOKEN")
    return missing


def main() -> None:
    settings = get_settings()
    missing = missing_prod_settings(settings)
    if missing:
        sys.exit(f"refusing to start: {', '.join(missing)} must be set in prod")

    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
