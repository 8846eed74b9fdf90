import json
from typing import Any, List


class StubResponse:
    def __init__(self, body: Any, status: int = 201):
        self.status = status
        self._raw = body if isinstance(body, bytes) else json.dumps(body).encode()
        self.released = False

    async def read(self) -> bytes:
        return self._raw

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.released = True
        return False


class StubSession:
    """Records every post() call instead of touching the network."""

    def __init__(self, response: StubResponse | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.calls: List[dict] = []

    def post(self, url: str, **kwargs) -> StubResponse:
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response
