from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypedDict

from .exceptions import ConfigurationError
from .models.identity import UidField


@dataclass(frozen=True)
class EnvVar:
    """A credential that is read from the environment when a client is built."""

    name: str


CredentialValue = str | EnvVar | Mapping[str, str]


class Config(TypedDict, total=False):
    client_id: CredentialValue
    client_secret: CredentialValue

    # Strategy options
    uid_field: str | UidField
    default_scope: str
    send_redirect_uri: bool

    # Client overrides
    site: str
    authorize_endpoint: str
    token_endpoint: str
    verify_endpoint: str
    redirect_uri: str


@dataclass(frozen=True)
class ProviderCredentials:
    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"ProviderCredentials(client_id={self.client_id!r}, client_secret='***')"


@dataclass(frozen=True)
class StrategyOptions:
    uid_field: UidField = UidField.OWNER_HASH
    default_scope: str = ""
    send_redirect_uri: bool = True

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> StrategyOptions:
        uid_field = config.get("uid_field", UidField.OWNER_HASH)

        try:
            uid_field = UidField(uid_field)
        except ValueError as e:
            allowed = ", ".join(field.value for field in UidField)

            raise ConfigurationError(
                f"Invalid uid_field {uid_field!r}, expected one of: {allowed}"
            ) from e

        default_scope = config.get("default_scope", "")

        if not isinstance(default_scope, str):
            raise ConfigurationError("'default_scope' must be a string")

        send_redirect_uri = config.get("send_redirect_uri", True)

        if not isinstance(send_redirect_uri, bool):
            raise ConfigurationError("'send_redirect_uri' must be a boolean")

        return cls(
            uid_field=uid_field,
            default_scope=default_scope,
            send_redirect_uri=send_redirect_uri,
        )


def check_config(config: Any) -> Mapping[str, Any]:
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"EVE SSO configuration must be a mapping, got {type(config).__name__}"
        )

    return config


def resolve_credential(config: Mapping[str, Any], key: str) -> str:
    """Resolve a single credential, following environment indirections.

    The value may be a literal string, an ``EnvVar`` or a mapping of the form
    ``{"env": "NAME"}``. Environment variables are read on every call.
    """
    if key not in config:
        raise ConfigurationError(f"{key!r} missing from EVE SSO configuration")

    value = config[key]

    if isinstance(value, Mapping):
        if set(value) != {"env"}:
            raise ConfigurationError(
                f"{key!r} must be a string or an {{'env': NAME}} mapping"
            )

        value = EnvVar(value["env"])

    if isinstance(value, EnvVar):
        env_value = os.environ.get(value.name)

        if env_value is None:
            raise ConfigurationError(
                f"{value.name!r} missing from environment, expected for {key!r}"
            )

        value = env_value

    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{key!r} must be a non-empty string")

    return value


def resolve_credentials(config: Any) -> ProviderCredentials:
    config = check_config(config)

    return ProviderCredentials(
        client_id=resolve_credential(config, "client_id"),
        client_secret=resolve_credential(config, "client_secret"),
    )
