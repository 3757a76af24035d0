import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from lia import AsyncHTTPRequest

from ._config import StrategyOptions, check_config, resolve_credentials
from ._context import Context
from ._route import Route
from .exceptions import IdentityError, TokenExchangeError
from .identity import IdentityResolver, RemoteIntrospectResolver
from .models.auth import Credentials, Extra, Failure, Info, NormalizedAuthResult
from .models.identity import VerifiedIdentity
from .models.oauth_token import Token
from .oauth import AuthorizationRequestOptions, OAuthClient, build_client
from .utils._response import Response
from .utils._url import callback_url

logger = logging.getLogger(__name__)


@dataclass
class AuthSession:
    """State of a single callback, handed from phase to phase.

    Holds the raw token and identity, so it must not outlive the request;
    call ``EVESSOStrategy.cleanup`` once the response has been built.
    """

    token: Token | None = None
    identity: VerifiedIdentity | None = None
    failures: list[Failure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures and self.identity is not None

    def fail(self, kind: str, message: str | None) -> None:
        self.failures.append(Failure(kind=kind, message=message))


class EVESSOStrategy:
    """Authenticate users with EVE Online's SSO.

    Example:
        strategy = EVESSOStrategy(
            {
                "client_id": EnvVar("EVESSO_CLIENT_ID"),
                "client_secret": EnvVar("EVESSO_SECRET_KEY"),
                "uid_field": "character_id",
                "default_scope": "esi-clones.read_implants.v1",
            }
        )

    The identity is resolved with ``RemoteIntrospectResolver`` unless another
    resolver is given.
    """

    id: ClassVar[str] = "evesso"

    def __init__(
        self,
        config: Mapping[str, Any],
        resolver: IdentityResolver | None = None,
    ):
        self.config = check_config(config)
        # Fail at startup rather than on the first request
        resolve_credentials(self.config)

        self.options = StrategyOptions.from_config(self.config)
        self.resolver: IdentityResolver = resolver or RemoteIntrospectResolver()

    def client(self, **overrides: Any) -> OAuthClient:
        return build_client(self.config, **overrides)

    def authorization_options(
        self, request: AsyncHTTPRequest, redirect_uri: str | None
    ) -> AuthorizationRequestOptions:
        scope = request.query_params.get("scope")

        if scope is None:
            scope = self.options.default_scope

        if self.options.send_redirect_uri:
            # A configured redirect_uri is also sent with the token exchange
            redirect_uri = self.config.get("redirect_uri") or redirect_uri
        else:
            redirect_uri = None

        return AuthorizationRequestOptions(
            scope=scope,
            state=request.query_params.get("state"),
            redirect_uri=redirect_uri,
        )

    def handle_request(self, request: AsyncHTTPRequest, redirect_uri: str) -> Response:
        """
        Redirect to the EVE SSO login page.

        The requested scopes can be passed as ``?scope=``, they default to the
        ``default_scope`` option. A ``state`` query parameter is forwarded
        as is, it is up to the host to generate and check it.
        """
        options = self.authorization_options(request, redirect_uri)
        url = self.client().authorize_url(options)

        logger.debug(f"Redirecting to EVE SSO with scope {options.scope!r}")

        return Response(status_code=302, headers={"Location": url})

    def handle_callback(self, request: AsyncHTTPRequest) -> AuthSession:
        """
        Exchange the code returned by EVE SSO and resolve the character.

        Errors are recorded on the returned session instead of being raised,
        only configuration errors propagate.
        """
        session = AuthSession()
        code = request.query_params.get("code")

        if code is None:
            error = request.query_params.get("error")

            if error:
                logger.error(f"EVE SSO returned an error: {error}")
                session.fail(error, request.query_params.get("error_description"))
            else:
                logger.error("No authorization code received in callback")
                session.fail("missing_code", "No code received")

            return session

        client = self.client()

        try:
            token = client.exchange_token(code)
        except TokenExchangeError as e:
            session.fail("token", e.error_description)

            return session

        if token.is_error():
            session.fail(
                token.other_params.get("error") or "token",
                token.other_params.get("error_description"),
            )

            return session

        self.fetch_identity(session, client, token)

        return session

    def fetch_identity(
        self, session: AuthSession, client: OAuthClient, token: Token
    ) -> None:
        session.token = token

        try:
            session.identity = self.resolver.resolve(client, token)
        except IdentityError as e:
            logger.error(f"Failed to resolve identity: {e.error_description}")
            session.fail(self.resolver.failure_kind, e.error_description)

    def cleanup(self, session: AuthSession) -> None:
        session.token = None
        session.identity = None

    def uid(self, session: AuthSession) -> str:
        assert session.identity is not None, "No identity in session"

        return str(session.identity.get(self.options.uid_field))

    def credentials(self, session: AuthSession) -> Credentials:
        token = session.token
        assert token is not None, "No token in session"

        return Credentials(
            token=token.access_token,
            refresh_token=token.refresh_token,
            expires_at=token.expires_at,
            token_type=token.token_type,
            expires=token.expires_at is not None,
            # "" splits to [""], consumers rely on it
            scopes=token.scope.split(" "),
        )

    def info(self, session: AuthSession) -> Info:
        assert session.identity is not None, "No identity in session"

        return Info(name=session.identity.character_name)

    def extra(self, session: AuthSession) -> Extra:
        return Extra(raw_token=session.token, raw_identity=session.identity)

    def auth(self, session: AuthSession) -> NormalizedAuthResult:
        return NormalizedAuthResult(
            provider=self.id,
            uid=self.uid(session),
            credentials=self.credentials(session),
            info=self.info(session),
            extra=self.extra(session),
        )

    async def authorize(self, request: AsyncHTTPRequest, context: Context) -> Response:
        return self.handle_request(
            request, callback_url(str(request.url), context.base_url)
        )

    async def callback(self, request: AsyncHTTPRequest, context: Context) -> Response:
        session = self.handle_callback(request)

        try:
            if not session.succeeded:
                return context.on_failure(session.failures, request)

            return context.on_success(self.auth(session), request)
        finally:
            self.cleanup(session)

    @property
    def routes(self) -> list[Route]:
        return [
            Route(
                path=f"/{self.id}/authorize",
                methods=["GET"],
                function=self.authorize,
                operation_id=f"{self.id}_authorize",
                summary="Redirect to EVE SSO",
            ),
            Route(
                path=f"/{self.id}/callback",
                methods=["GET"],
                function=self.callback,
                operation_id=f"{self.id}_callback",
                summary="Handle the EVE SSO callback",
            ),
        ]
