from collections.abc import Callable

from lia import AsyncHTTPRequest

from .models.auth import Failure, NormalizedAuthResult
from .utils._response import Response


def default_on_success(
    result: NormalizedAuthResult, request: AsyncHTTPRequest
) -> Response:
    return Response.auth_result(result)


def default_on_failure(failures: list[Failure], request: AsyncHTTPRequest) -> Response:
    return Response.failures(failures)


class Context:
    """What the host application plugs into the EVE SSO routes.

    ``on_success`` receives the normalized result once the callback phase
    succeeded, ``on_failure`` the list of failures otherwise. Both return the
    response sent to the browser.
    """

    def __init__(
        self,
        base_url: str | None = None,
        on_success: Callable[[NormalizedAuthResult, AsyncHTTPRequest], Response]
        | None = None,
        on_failure: Callable[[list[Failure], AsyncHTTPRequest], Response]
        | None = None,
    ):
        self.base_url = base_url
        self.on_success = on_success or default_on_success
        self.on_failure = on_failure or default_on_failure
