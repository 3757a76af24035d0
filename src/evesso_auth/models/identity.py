from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import FormatError

SUBJECT_PATTERN = re.compile(r"^CHARACTER:EVE:(\d+)$")


class UidField(str, Enum):
    OWNER_HASH = "owner_hash"
    CHARACTER_ID = "character_id"
    NAME = "name"


class VerifiedIdentity(BaseModel):
    """The EVE character behind an access token."""

    subject_id: str = Field(examples=["CHARACTER:EVE:2112625428"])
    character_id: int = Field(examples=[2112625428])
    character_name: str = Field(examples=["CCP Zoetrope"])
    owner_hash: str = Field(examples=["XM4D...8IEo="])

    @classmethod
    def from_subject(
        cls, subject: str, character_name: str, owner_hash: str
    ) -> VerifiedIdentity:
        match = SUBJECT_PATTERN.match(subject) if isinstance(subject, str) else None

        if not match:
            raise FormatError(f"Unexpected subject format: {subject!r}")

        try:
            return cls(
                subject_id=subject,
                character_id=int(match.group(1)),
                character_name=character_name,
                owner_hash=owner_hash,
            )
        except ValidationError as e:
            raise FormatError(f"Invalid identity: {e.error_count()} errors") from e

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> VerifiedIdentity:
        """Build the identity from the claims of an SSO v2 JWT access token."""
        try:
            return cls.from_subject(claims["sub"], claims["name"], claims["owner"])
        except KeyError as e:
            raise FormatError(f"Missing claim in access token: {e.args[0]}") from e

    @classmethod
    def from_verify_response(cls, body: dict[str, Any]) -> VerifiedIdentity:
        """Build the identity from the body of the ``/oauth/verify`` endpoint."""
        try:
            subject = f"CHARACTER:EVE:{body['CharacterID']}"

            return cls.from_subject(
                subject, body["CharacterName"], body["CharacterOwnerHash"]
            )
        except KeyError as e:
            raise FormatError(f"Missing field in verify response: {e.args[0]}") from e

    def get(self, field: UidField) -> str | int:
        return {
            UidField.OWNER_HASH: self.owner_hash,
            UidField.CHARACTER_ID: self.character_id,
            UidField.NAME: self.character_name,
        }[field]
