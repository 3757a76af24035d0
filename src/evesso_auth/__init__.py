from evesso_auth._config import (
    Config,
    EnvVar,
    ProviderCredentials,
    StrategyOptions,
    resolve_credentials,
)
from evesso_auth._context import Context
from evesso_auth.exceptions import (
    ConfigurationError,
    DecodeError,
    EVESSOException,
    FormatError,
    IdentityError,
    TokenExchangeError,
    TransportError,
    UnauthorizedError,
)
from evesso_auth.identity import (
    IdentityResolver,
    LocalDecodeResolver,
    RemoteIntrospectResolver,
)
from evesso_auth.models.auth import (
    Credentials,
    Extra,
    Failure,
    Info,
    NormalizedAuthResult,
)
from evesso_auth.models.identity import UidField, VerifiedIdentity
from evesso_auth.models.oauth_token import Token
from evesso_auth.oauth import (
    AuthorizationRequestOptions,
    OAuthClient,
    OAuthClientConfig,
    build_client,
)
from evesso_auth.strategy import AuthSession, EVESSOStrategy

__all__ = [
    "AuthSession",
    "AuthorizationRequestOptions",
    "Config",
    "ConfigurationError",
    "Context",
    "Credentials",
    "DecodeError",
    "EVESSOException",
    "EVESSOStrategy",
    "EnvVar",
    "Extra",
    "Failure",
    "FormatError",
    "IdentityError",
    "IdentityResolver",
    "Info",
    "LocalDecodeResolver",
    "NormalizedAuthResult",
    "OAuthClient",
    "OAuthClientConfig",
    "ProviderCredentials",
    "RemoteIntrospectResolver",
    "StrategyOptions",
    "Token",
    "TokenExchangeError",
    "TransportError",
    "UidField",
    "UnauthorizedError",
    "VerifiedIdentity",
    "build_client",
    "resolve_credentials",
]
