"""
cloudops_credentials.credentials.naming

Backend path and name conventions.

These strings are shared with existing Vault deployments and must stay bit-exact.
"""

from __future__ import annotations

import re

from cloudops_credentials.credentials.errors import InvalidName

APPROLE_PREFIX = "auth/approle/role"
AWS_ROLES_PREFIX = "aws/roles"
AWS_STS_PREFIX = "aws/sts"
LOGIN_PATH = "auth/approle/login"
DEFAULT_NAMESPACE_PREFIX = "argo-cloudops-projects"

# AppRole parameters written on every project creation.
SECRET_ID_TTL = "8776h"  # ~1 year
TOKEN_MAX_TTL = "10m"
# With a single use the login call itself exhausts the token.
TOKEN_NUM_USES = 3

TARGET_SEPARATOR = "-target"
NAME_MAX_LENGTH = 64
_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


def validate_name(name: str, *, kind: str) -> str:
    """
    Reject project and target names that could escape their namespace.

    Names are embedded in Vault paths and in policy globs. A project named
    `a-target-b` (or `a-target`) would sit under project `a`'s
    `<prefix>-a-target-*` glob, so the separator may not appear in a name.
    """
    if not name or len(name) > NAME_MAX_LENGTH or not _NAME_RE.fullmatch(name):
        raise InvalidName(
            f"invalid {kind} name: use 1-{NAME_MAX_LENGTH} letters, digits, '.', '_' or '-'"
        )
    if f"{TARGET_SEPARATOR}-" in name or name.endswith(TARGET_SEPARATOR):
        raise InvalidName(f"invalid {kind} name: may not contain '{TARGET_SEPARATOR}'")
    return name


def policy_name(project_name: str, *, namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX) -> str:
    return f"{namespace_prefix}-{project_name}"


def project_role_path(
    project_name: str, *, namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX
) -> str:
    return f"{APPROLE_PREFIX}/{namespace_prefix}-{project_name}"


def role_id_path(project_name: str, *, namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX) -> str:
    return f"{project_role_path(project_name, namespace_prefix=namespace_prefix)}/role-id"


def secret_id_path(
    project_name: str, *, namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX
) -> str:
    return f"{project_role_path(project_name, namespace_prefix=namespace_prefix)}/secret-id"


def target_key_prefix(
    project_name: str, *, namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX
) -> str:
    # Key as it appears in a listing of `aws/roles/`.
    return f"{namespace_prefix}-{project_name}-target-"


def target_path(
    project_name: str,
    target_name: str,
    *,
    namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX,
) -> str:
    prefix = target_key_prefix(project_name, namespace_prefix=namespace_prefix)
    return f"{AWS_ROLES_PREFIX}/{prefix}{target_name}"
