"""
cloudops_credentials.credentials.errors

Error taxonomy for the credentials core.

Responsibilities:
- Distinguish "absent" (`NotFound`) from backend/transport failures (`BackendError`).
- Carry operation and path context for diagnosis without embedding secrets.
"""

from __future__ import annotations


class CredentialsError(Exception):
    pass


class MalformedAuthorization(CredentialsError):
    def __init__(self, message: str = "invalid authorization header provided") -> None:
        super().__init__(message)


class PermissionDenied(CredentialsError):
    pass


class NotFound(CredentialsError):
    pass


class InvalidName(CredentialsError):
    pass


class BackendError(CredentialsError):
    """
    Any failure reported by the secret backend other than "not found".

    `errors` holds the backend-supplied detail (Vault's `errors` list) when available.
    """

    def __init__(
        self,
        *,
        operation: str,
        path: str,
        detail: str = "",
        errors: list[str] | None = None,
    ) -> None:
        self.operation = operation
        self.path = path
        self.errors = list(errors or [])
        message = f"{operation} {path} failed"
        if detail:
            message = f"{message}: {detail}"
        if self.errors:
            message = f"{message}: {'; '.join(self.errors)}"
        super().__init__(message)


class DecodeError(CredentialsError):
    def __init__(self, *, operation: str, path: str, detail: str) -> None:
        self.operation = operation
        self.path = path
        super().__init__(f"{operation} {path}: unexpected backend response: {detail}")


# --- Module Notes -----------------------------------------------------------
# The API layer maps these to HTTP status codes in `cloudops_credentials.api.errors`.
