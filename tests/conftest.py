import base64
import json
from typing import Any

import pytest
from lia import AsyncHTTPRequest
from lia.request import TestingRequestAdapter

from evesso_auth._config import Config
from evesso_auth._context import Context
from evesso_auth.identity import LocalDecodeResolver
from evesso_auth.strategy import EVESSOStrategy

TOKEN_ENDPOINT = "https://login.eveonline.com/v2/oauth/token"
VERIFY_ENDPOINT = "https://login.eveonline.com/oauth/verify"


def encode_segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data).encode("utf-8")

    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def make_access_token(claims: dict[str, Any]) -> str:
    """Build an unsigned JWT shaped like the ones EVE SSO v2 issues."""
    header = encode_segment({"alg": "RS256", "kid": "JWT-Signature-Key", "typ": "JWT"})

    return f"{header}.{encode_segment(claims)}.c2lnbmF0dXJl"


def make_request(path: str, **query_params: str) -> AsyncHTTPRequest:
    return AsyncHTTPRequest(
        TestingRequestAdapter(
            method="GET",
            url=f"http://localhost:8000/auth/evesso/{path}",
            query_params=query_params,
        )
    )


@pytest.fixture
def claims() -> dict[str, Any]:
    return {
        "scp": ["esi-skills.read_skills.v1"],
        "jti": "998e12c7-3241-43c5-8355-2c48822e0a1b",
        "kid": "JWT-Signature-Key",
        "sub": "CHARACTER:EVE:2112625428",
        "azp": "test_client_id",
        "name": "CCP Zoetrope",
        "owner": "8PmzCeTKb4VFUDrHLc/AeZXDSWM=",
        "exp": 1534412504,
        "iss": "login.eveonline.com",
    }


@pytest.fixture
def access_token(claims: dict[str, Any]) -> str:
    return make_access_token(claims)


@pytest.fixture
def token_response(access_token: str) -> dict[str, Any]:
    return {
        "access_token": access_token,
        "expires_in": 1199,
        "token_type": "Bearer",
        "refresh_token": "gEy...fM0",
        "scope": "esi-skills.read_skills.v1 esi-clones.read_implants.v1",
    }


@pytest.fixture
def verify_response() -> dict[str, Any]:
    return {
        "CharacterID": 2112625428,
        "CharacterName": "CCP Zoetrope",
        "ExpiresOn": "2018-08-16T09:41:44",
        "Scopes": "esi-skills.read_skills.v1",
        "TokenType": "Character",
        "CharacterOwnerHash": "8PmzCeTKb4VFUDrHLc/AeZXDSWM=",
        "IntellectualProperty": "EVE",
    }


@pytest.fixture
def config() -> Config:
    return {
        "client_id": "test_client_id",
        "client_secret": "test_client_secret",
    }


@pytest.fixture
def strategy(config: Config) -> EVESSOStrategy:
    return EVESSOStrategy(config)


@pytest.fixture
def local_strategy(config: Config) -> EVESSOStrategy:
    return EVESSOStrategy(config, resolver=LocalDecodeResolver())


@pytest.fixture
def context() -> Context:
    return Context()
