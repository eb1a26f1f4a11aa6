"""
cloudops_credentials.credentials.authorization

Caller credential parsing and classification.

Responsibilities:
- Parse the raw `<provider>:<key>:<secret>` authorization string.
- Classify the caller as admin or tenant once, at parse time, from configuration.
- Confirm admin status against the process-wide admin secret.
"""

from __future__ import annotations

import enum
import hmac
from collections.abc import Iterable
from dataclasses import dataclass, field

from cloudops_credentials.credentials.errors import MalformedAuthorization

DELIMITER = ":"
DEFAULT_ADMIN_KEYS = frozenset({"admin"})


class CredentialClass(enum.Enum):
    ADMIN = "admin"
    TENANT = "tenant"


@dataclass(frozen=True, slots=True)
class Authorization:
    """
    Parsed caller credentials.

    For tenants `key` is the project's AppRole role id and `secret` its secret id.
    """

    provider: str
    key: str
    secret: str = field(repr=False)
    credential_class: CredentialClass = CredentialClass.TENANT


def parse_authorization(
    raw: str,
    *,
    admin_keys: Iterable[str] = DEFAULT_ADMIN_KEYS,
) -> Authorization:
    # Only the first two delimiters are significant; the secret may contain colons.
    parts = raw.split(DELIMITER, 2)
    if len(parts) < 3 or any(part == "" for part in parts):
        raise MalformedAuthorization()

    provider, key, secret = parts
    credential_class = (
        CredentialClass.ADMIN if key in frozenset(admin_keys) else CredentialClass.TENANT
    )
    return Authorization(
        provider=provider,
        key=key,
        secret=secret,
        credential_class=credential_class,
    )


def is_admin(a: Authorization) -> bool:
    return a.credential_class is CredentialClass.ADMIN


def is_authorized_admin(a: Authorization, expected_secret: str) -> bool:
    if not is_admin(a) or not expected_secret:
        return False
    return hmac.compare_digest(a.secret.encode(), expected_secret.encode())
