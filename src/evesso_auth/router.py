import logging
from collections.abc import Callable

from fastapi import APIRouter
from lia import AsyncHTTPRequest

from ._context import Context
from .models.auth import Failure, NormalizedAuthResult
from .strategy import EVESSOStrategy
from .utils._response import Response

logger = logging.getLogger(__name__)


class EVESSORouter(APIRouter):
    """FastAPI router exposing ``/evesso/authorize`` and ``/evesso/callback``.

    Example:
        router = EVESSORouter(
            EVESSOStrategy({"client_id": ..., "client_secret": ...}),
            on_success=login_user,
        )
        app.include_router(router, prefix="/auth")
    """

    def __init__(
        self,
        strategy: EVESSOStrategy,
        base_url: str | None = None,
        on_success: Callable[[NormalizedAuthResult, AsyncHTTPRequest], Response]
        | None = None,
        on_failure: Callable[[list[Failure], AsyncHTTPRequest], Response]
        | None = None,
    ):
        super().__init__()

        self.strategy = strategy
        self._context = Context(
            base_url=base_url,
            on_success=on_success,
            on_failure=on_failure,
        )

        for route in strategy.routes:
            self.add_api_route(
                route.path,
                route.to_fastapi_endpoint(self._context),
                methods=route.methods,
                operation_id=route.operation_id,
                summary=route.summary,
            )

        logger.debug(f"Registered {len(strategy.routes)} EVE SSO routes")
