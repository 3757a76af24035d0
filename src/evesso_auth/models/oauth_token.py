from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenEndpointResponse(BaseModel):
    """Raw body of the token endpoint, unknown fields are kept as extras."""

    model_config = ConfigDict(extra="allow")

    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = Field(
        None, description="Lifetime of the access token in seconds"
    )
    token_type: str | None = None


class Token(BaseModel):
    access_token: str | None = Field(
        None, description="The issued access token, missing when the grant failed"
    )
    refresh_token: str | None = Field(
        None, description="Token used to obtain new access tokens"
    )
    expires_at: int | None = Field(
        None, description="Unix timestamp at which the access token expires"
    )
    token_type: str = Field("Bearer", description="The type of token")
    other_params: dict[str, Any] = Field(
        default_factory=dict,
        description="Every other field of the token response, e.g. scope or error",
    )

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> Token:
        """Build a token from a decoded token endpoint response.

        Fields that are not part of the token itself (``scope``, ``error``,
        ``error_description``...) are kept in ``other_params``.

        Raises:
            ValidationError: If a known field has the wrong type.
        """
        response = TokenEndpointResponse.model_validate(data)
        expires_at = None

        if response.expires_in is not None:
            expires_at = int(time.time()) + response.expires_in

        return cls(
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            expires_at=expires_at,
            token_type=response.token_type or "Bearer",
            other_params=dict(response.model_extra or {}),
        )

    @property
    def scope(self) -> str:
        return self.other_params.get("scope") or ""

    def is_error(self) -> bool:
        return self.access_token is None
