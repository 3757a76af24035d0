from __future__ import annotations

from pydantic import BaseModel, Field

from .identity import VerifiedIdentity
from .oauth_token import Token


class Credentials(BaseModel):
    token: str | None
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str = "Bearer"
    expires: bool = False
    scopes: list[str] = Field(default_factory=list)


class Info(BaseModel):
    name: str | None = None


class Extra(BaseModel):
    raw_token: Token | None = None
    raw_identity: VerifiedIdentity | None = None


class NormalizedAuthResult(BaseModel):
    """Provider-agnostic result handed over to the host application."""

    provider: str = "evesso"
    uid: str
    credentials: Credentials
    info: Info
    extra: Extra


class Failure(BaseModel):
    kind: str = Field(examples=["missing_code"])
    message: str | None = Field(default=None, examples=["No code received"])
