"""
cloudops_credentials.credentials.models

Credentials domain models.

Responsibilities:
- Request/response entities shared by the core and the API layer.
- Typed schemas for the backend responses the core consumes; shape mismatches
  surface as `DecodeError` instead of being defaulted.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cloudops_credentials.credentials.errors import DecodeError, InvalidName
from cloudops_credentials.credentials.naming import validate_name

_M = TypeVar("_M", bound=BaseModel)


class TargetProperties(BaseModel):
    credential_type: str
    policy_arns: list[str] = Field(default_factory=list)
    role_arn: str


class CreateTargetRequest(BaseModel):
    name: str = Field(min_length=1)
    properties: TargetProperties
    type: str = "aws_account"

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _checked_name(v, kind="target")


class CreateProjectRequest(BaseModel):
    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _checked_name(v, kind="project")


class ProjectDescriptor(BaseModel):
    name: str


class ProjectCredentials(BaseModel):
    role_id: str
    secret_id: str


def _checked_name(name: str, *, kind: str) -> str:
    # pydantic reports ValueError as a field error (422 at the API).
    try:
        return validate_name(name, kind=kind)
    except InvalidName as e:
        raise ValueError(str(e)) from e


# Backend response schemas -------------------------------------------------


class _BackendData(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)


class RoleIdData(_BackendData):
    role_id: str


class SecretIdData(_BackendData):
    secret_id: str


class TargetRoleData(_BackendData):
    role_arns: list[str] = Field(min_length=1)
    policy_arns: list[str]
    credential_type: str

    def to_properties(self) -> TargetProperties:
        return TargetProperties(
            credential_type=self.credential_type,
            policy_arns=list(self.policy_arns),
            role_arn=self.role_arns[0],
        )


class ListData(_BackendData):
    keys: list[str]


class LoginAuth(_BackendData):
    client_token: str = Field(min_length=1)


def decode(model: type[_M], payload: Any, *, operation: str, path: str) -> _M:
    if not isinstance(payload, dict):
        raise DecodeError(operation=operation, path=path, detail="response body is missing")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise DecodeError(operation=operation, path=path, detail=f"invalid fields: {fields}") from e


# --- Module Notes -----------------------------------------------------------
# `decode` reports field names only; values may be secret ids.
