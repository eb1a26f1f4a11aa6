"""
cloudops_credentials.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API, the Vault client and
  the credentials core.
- Hide secrets from repr/logging (Vault token, admin secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object injected across layers.

    Every field can be overridden with a `CLOUDOPS_`-prefixed environment variable,
    e.g. `CLOUDOPS_VAULT_ADDR` or `CLOUDOPS_ADMIN_SECRET`.
    """

    model_config = SettingsConfigDict(env_prefix="CLOUDOPS_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "cloudops-credentials"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8443

    # Vault
    vault_addr: str = "http://127.0.0.1:8200"
    vault_token: str = Field(default="", repr=False)
    vault_namespace: str | None = None
    vault_timeout_seconds: float = 10.0

    # Admin credentials. A caller whose key is in `admin_keys` is classified as an
    # administrator; the secret must still equal `admin_secret` for admin operations.
    admin_secret: str = Field(default="", repr=False)
    admin_keys: list[str] = Field(default_factory=lambda: ["admin"])

    # Prefix shared by every policy, AppRole and AWS role this service owns.
    namespace_prefix: str = "argo-cloudops-projects"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Changing `namespace_prefix` orphans every project created under the old value;
# treat it as fixed for the lifetime of a Vault deployment.
