from urllib.parse import urlparse


def callback_url(request_url: str, base_url: str | None = None) -> str:
    """
    Build the callback URL that sits next to the request phase URL.

    ``/auth/evesso/authorize`` becomes ``/auth/evesso/callback``. The query
    string is dropped. When ``base_url`` is given it replaces the scheme and
    host of the request, which is needed behind reverse proxies where the
    internal request URL is not reachable by the browser.
    """
    parsed = urlparse(request_url)

    path_parts = parsed.path.rstrip("/").split("/")
    path_parts[-1] = "callback"
    path = "/" + "/".join(path_parts).lstrip("/")

    if base_url:
        return f"{base_url.rstrip('/')}{path}"

    return f"{parsed.scheme}://{parsed.netloc}{path}"
