"""Minimal Pydantic models for the auth service ``/user`` endpoint."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict


class AuthBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class AuthUser(AuthBaseModel):
    id: UUID
    email: str | None = None
    role: str | None = None


class AuthError(AuthBaseModel):
    code: int | None = None
    msg: str | None = None
    message: str | None = None

    @property
    def text(self) -> str:
        return self.msg or self.message or "unknown auth error"
