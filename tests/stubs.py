"""In-memory stand-in for the REST API.

Routes are keyed by ``(method, path)``. A route answers with a fixed
response, a queue of responses (the last one repeats), or a callable taking
the ``httpx.Request``. Every request is recorded.

Usage:
    api_stub.on("GET", "/api/v1/provider/feeplan", json={"success": True, "data": {...}})
    api_stub.on("DELETE", "/api/v1/provider/feeplan", status_code=500, json={"error": "boom"})
"""

import json as jsonlib
from typing import Any, Callable, Optional

import httpx

Responder = Callable[[httpx.Request], httpx.Response]


def make_response(status_code: int = 200, json: Any = None) -> httpx.Response:
    if json is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=json)


class ApiStub:
    def __init__(self):
        self.routes: dict[tuple[str, str], list[Responder]] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def on(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> "ApiStub":
        responder = handler or (lambda request: make_response(status_code, json))
        self.routes.setdefault((method.upper(), path), []).append(responder)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return make_response(404, {"success": False, "error": "Not stubbed"})
        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        return responder(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method.upper() and r.url.path == path
        ]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return jsonlib.loads(request.content) if request.content else None
