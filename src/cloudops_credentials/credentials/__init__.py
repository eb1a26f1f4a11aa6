"""
cloudops_credentials.credentials

Credentials core: authorization parsing, policy synthesis, project/target
lifecycle, token exchange and the Provider facade composing them.

The core talks to the secret backend only through the protocols in
`credentials.backend`; it has no knowledge of HTTP or Vault's wire format.
"""

from cloudops_credentials.credentials.authorization import (
    Authorization,
    CredentialClass,
    is_admin,
    is_authorized_admin,
    parse_authorization,
)
from cloudops_credentials.credentials.errors import (
    BackendError,
    CredentialsError,
    DecodeError,
    MalformedAuthorization,
    NotFound,
    PermissionDenied,
)
from cloudops_credentials.credentials.provider import (
    Provider,
    VaultProvider,
    vault_provider_factory,
)

__all__ = [
    "Authorization",
    "BackendError",
    "CredentialClass",
    "CredentialsError",
    "DecodeError",
    "MalformedAuthorization",
    "NotFound",
    "PermissionDenied",
    "Provider",
    "VaultProvider",
    "is_admin",
    "is_authorized_admin",
    "parse_authorization",
    "vault_provider_factory",
]
