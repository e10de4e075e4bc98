"""Remote fetch error types.

Each error carries the HTTP status the web proxy should answer with, so the
server can map errors without inspecting messages.
"""

from __future__ import annotations


class FetchError(Exception):
    def __init__(self, *, status_code: int, url: str, message: str):
        super().__init__(message)
        self.status_code = int(status_code)
        self.url = str(url or "")


class MissingUrlError(FetchError):
    def __init__(self, *, url: str = "", message: str = "Missing url"):
        super().__init__(status_code=400, url=url, message=message)


class UpstreamStatusError(FetchError):
    pass


class FetchTimeoutError(FetchError):
    pass


class FetchNetworkError(FetchError):
    pass
