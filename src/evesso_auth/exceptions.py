class EVESSOException(Exception):
    def __init__(self, error: str, error_description: str | None = None) -> None:
        super().__init__(error_description or error)
        self.error = error
        self.error_description = error_description


class ConfigurationError(EVESSOException):
    """Raised when the provider configuration is missing or malformed.

    This is not recoverable at request time and is left for the host
    application to surface.
    """

    def __init__(self, error_description: str) -> None:
        super().__init__("configuration_error", error_description)


class TokenExchangeError(EVESSOException):
    def __init__(self, error_description: str) -> None:
        super().__init__("token_exchange_failed", error_description)


class IdentityError(EVESSOException):
    """Base class for failures while resolving the identity behind a token."""


class UnauthorizedError(IdentityError):
    def __init__(self, error_description: str = "Access token was rejected") -> None:
        super().__init__("unauthorized", error_description)


class TransportError(IdentityError):
    def __init__(self, error_description: str) -> None:
        super().__init__("transport_error", error_description)


class DecodeError(IdentityError):
    def __init__(self, error_description: str) -> None:
        super().__init__("decode_error", error_description)


class FormatError(IdentityError):
    def __init__(self, error_description: str) -> None:
        super().__init__("format_error", error_description)
