import base64
import binascii
import json
import logging
import re
from typing import Any

import httpx
from typing_extensions import Protocol

from .exceptions import DecodeError, FormatError, TransportError, UnauthorizedError
from .models.identity import VerifiedIdentity
from .models.oauth_token import Token
from .oauth import OAuthClient

logger = logging.getLogger(__name__)

BASE64URL_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


class IdentityResolver(Protocol):
    """Resolves the EVE character an access token was issued for."""

    # Failure kind reported to the host when resolution fails
    failure_kind: str

    def resolve(self, client: OAuthClient, token: Token) -> VerifiedIdentity:
        """Raises an ``IdentityError`` subclass on failure."""
        ...


class RemoteIntrospectResolver:
    """Asks EVE SSO's verify endpoint who the token belongs to.

    The token is validated server side, so this is the default resolver.
    """

    failure_kind = "OAuth2"

    def fetch_verify_response(self, client: OAuthClient, token: Token) -> Any:
        try:
            response = client.get(client.config.verify_endpoint, token)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Verify endpoint returned {e.response.status_code}: {e.response.text}"
            )

            if e.response.status_code == 401:
                raise UnauthorizedError() from e

            raise TransportError(
                f"Verify endpoint returned {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Failed to call verify endpoint: {str(e)}")
            raise TransportError("Failed to call verify endpoint") from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Failed to parse verify response: {str(e)}")
            raise TransportError("Failed to parse verify response") from e

    def resolve(self, client: OAuthClient, token: Token) -> VerifiedIdentity:
        body = self.fetch_verify_response(client, token)

        if not isinstance(body, dict):
            raise TransportError("Verify response is not a JSON object")

        return VerifiedIdentity.from_verify_response(body)


class LocalDecodeResolver:
    """Reads the identity from the claims of the JWT access token.

    WARNING: the token signature is NOT verified. Only use this when the
    token comes straight from the token endpoint over TLS.
    """

    failure_kind = "Verify"

    def decode_claims(self, access_token: str) -> dict[str, Any]:
        segments = access_token.split(".")

        if len(segments) != 3:
            raise FormatError(
                f"Access token has {len(segments)} segments, expected 3"
            )

        payload = segments[1]

        if not BASE64URL_PATTERN.fullmatch(payload):
            raise DecodeError("Access token payload is not base64url encoded")

        try:
            # JWTs strip base64 padding
            raw = base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4))
            claims = json.loads(raw.decode("utf-8"))
        except (binascii.Error, ValueError) as e:
            logger.error(f"Failed to decode access token payload: {str(e)}")
            raise DecodeError("Failed to decode access token payload") from e

        if not isinstance(claims, dict):
            raise DecodeError("Access token payload is not a JSON object")

        return claims

    def resolve(self, client: OAuthClient, token: Token) -> VerifiedIdentity:
        if not token.access_token:
            raise FormatError("Token has no access_token")

        return VerifiedIdentity.from_claims(self.decode_claims(token.access_token))
