"""
cloudops_credentials.credentials.policy

Vault ACL policy synthesis for projects.

Responsibilities:
- Render the read-only policy attached to a project's AppRole tokens.
"""

from __future__ import annotations

from cloudops_credentials.credentials.naming import (
    AWS_STS_PREFIX,
    DEFAULT_NAMESPACE_PREFIX,
    target_key_prefix,
)


def synthesize_readonly_policy(
    project_name: str,
    *,
    namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX,
) -> str:
    """
    Grant `read` on the project's own STS target namespace and nothing else.

    Pure function of its arguments, so re-creating a project rewrites an identical policy.
    """
    prefix = target_key_prefix(project_name, namespace_prefix=namespace_prefix)
    sts_path = f"{AWS_STS_PREFIX}/{prefix}*"
    return f'path "{sts_path}" {{ capabilities = ["read"] }}'


# --- Module Notes -----------------------------------------------------------
# Tokens issued from the project's AppRole carry only this policy
# (`token_no_default_policy=true`), which is what isolates projects from each other.
