"""
cloudops_credentials.credentials.tokens

Exchange of a project's AppRole credential pair for a short-lived Vault token.
"""

from __future__ import annotations

from cloudops_credentials.credentials import naming
from cloudops_credentials.credentials.authorization import Authorization, is_admin
from cloudops_credentials.credentials.backend import LogicalBackend
from cloudops_credentials.credentials.errors import PermissionDenied
from cloudops_credentials.credentials.models import LoginAuth, decode
from cloudops_credentials.observability.logging import get_logger

log = get_logger(__name__)


class TokenExchanger:
    def __init__(self, *, logical: LogicalBackend) -> None:
        self._logical = logical

    async def exchange(self, authorization: Authorization) -> str:
        """
        Log in with `(role_id=key, secret_id=secret)` and return the client token.

        Admin-class credentials are refused whether or not their secret is valid.
        """
        if is_admin(authorization):
            raise PermissionDenied("admin credentials cannot be used to get tokens")

        sec = await self._logical.write(
            naming.LOGIN_PATH,
            {"role_id": authorization.key, "secret_id": authorization.secret},
        )
        payload = sec.auth if sec is not None else None
        token = decode(LoginAuth, payload, operation="login", path=naming.LOGIN_PATH).client_token
        log.info("token.issued", provider=authorization.provider)
        return token
