from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from evesso_auth.router import EVESSORouter
from evesso_auth.strategy import EVESSOStrategy


@pytest.fixture
def test_app(strategy: EVESSOStrategy) -> FastAPI:
    app = FastAPI()

    app.include_router(EVESSORouter(strategy), prefix="/auth")

    return app


@pytest.fixture
def client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(test_app, follow_redirects=False) as c:
        yield c
