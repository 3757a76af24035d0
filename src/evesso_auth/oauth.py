import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._config import ProviderCredentials, check_config, resolve_credentials
from .exceptions import TokenExchangeError
from .models.oauth_token import Token

logger = logging.getLogger(__name__)

DEFAULTS = {
    "site": "https://esi.evetech.net",
    "authorize_endpoint": "https://login.eveonline.com/v2/oauth/authorize",
    "token_endpoint": "https://login.eveonline.com/v2/oauth/token",
    "verify_endpoint": "https://login.eveonline.com/oauth/verify",
}

CLIENT_FIELDS = {*DEFAULTS, "redirect_uri"}
NON_CLIENT_FIELDS = {
    "client_id",
    "client_secret",
    "uid_field",
    "default_scope",
    "send_redirect_uri",
}


class OAuthClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    site: str
    authorize_endpoint: str
    token_endpoint: str
    verify_endpoint: str
    credentials: ProviderCredentials
    redirect_uri: str | None = None
    extra_options: dict[str, Any] = Field(default_factory=dict)


class AuthorizationRequestOptions(BaseModel):
    scope: str = ""
    state: str | None = None
    redirect_uri: str | None = None


class OAuthClient:
    """OAuth2 client bound to the EVE SSO endpoints.

    Clients are cheap and are meant to be built for every request with
    ``build_client``; they hold no state besides their configuration.
    """

    def __init__(self, config: OAuthClientConfig):
        self.config = config

    @property
    def client_id(self) -> str:
        return self.config.credentials.client_id

    @property
    def client_secret(self) -> str:
        return self.config.credentials.client_secret

    def get_redirect_params(
        self, options: AuthorizationRequestOptions
    ) -> dict[str, str]:
        """
        Generate the query parameters for the redirect to the authorization endpoint.
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
        }

        if options.redirect_uri:
            params["redirect_uri"] = options.redirect_uri

        params["scope"] = options.scope

        if options.state is not None:
            params["state"] = options.state

        return params

    def authorize_url(self, options: AuthorizationRequestOptions) -> str:
        query = urlencode(self.get_redirect_params(options))

        return f"{self.config.authorize_endpoint}?{query}"

    def build_token_exchange_params(self, code: str) -> dict[str, str]:
        """Build the generic authorization code grant parameters."""
        params = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self.client_id,
        }

        if self.config.redirect_uri:
            params["redirect_uri"] = self.config.redirect_uri

        return params

    def send_token_request(self, data: dict[str, Any]) -> httpx.Response:
        """Send token exchange request.

        Credentials go in the Basic auth header only, EVE SSO rejects requests
        that also carry ``client_id`` in the body.
        """
        return httpx.post(
            self.config.token_endpoint,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            auth=(self.client_id, self.client_secret),
            data=data,
        )

    def exchange_token(self, code: str) -> Token:
        """Exchange an authorization code for a token.

        A 200 response that carries an OAuth error instead of a token is
        returned as a ``Token`` without ``access_token``, the error fields are
        available in ``other_params``.

        Raises:
            TokenExchangeError: If the request fails or the response can't be
                parsed.
        """
        params = self.build_token_exchange_params(code)
        params.pop("client_id", None)

        try:
            response = self.send_token_request(params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"HTTP error during token exchange: {e.response.status_code} - {e.response.text}"
            )
            raise TokenExchangeError(
                f"Token exchange failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Failed to exchange code for token: {str(e)}")
            raise TokenExchangeError("Failed to exchange code for token") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse token response: {str(e)}")
            raise TokenExchangeError("Failed to parse token response") from e

        if not isinstance(data, dict):
            logger.error("Token response is not a JSON object")
            raise TokenExchangeError("Failed to parse token response")

        try:
            token = Token.from_response(data)
        except ValidationError as e:
            logger.error(f"Invalid token response: {str(e)}")
            raise TokenExchangeError("Failed to parse token response") from e

        if token.is_error():
            logger.error(f"Token exchange failed: {token.other_params.get('error')}")

        return token

    def get(self, url: str, token: Token) -> httpx.Response:
        return httpx.get(
            url,
            headers={
                "Accept": "application/json",
                "Authorization": f"{token.token_type} {token.access_token}",
            },
        )


def build_client(config: Mapping[str, Any], **overrides: Any) -> OAuthClient:
    """Build a client from defaults, the provider configuration and overrides.

    Later sources take precedence. Credentials are resolved here, so
    environment indirections are read again for every client.

    Raises:
        ConfigurationError: If the configuration is not a mapping or the
            credentials are missing.
    """
    options = {**DEFAULTS, **check_config(config), **overrides}
    credentials = resolve_credentials(options)

    return OAuthClient(
        OAuthClientConfig(
            credentials=credentials,
            extra_options={
                key: value
                for key, value in options.items()
                if key not in CLIENT_FIELDS | NON_CLIENT_FIELDS
            },
            **{key: value for key, value in options.items() if key in CLIENT_FIELDS},
        )
    )
