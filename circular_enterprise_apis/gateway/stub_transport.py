"""
Stub transport implementation for the Gateway service.

Serves scripted responses from memory and records every request, so the
resolver, client and poller can be exercised deterministically without
network access.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .transport import HttpTransport
from .exceptions import GatewayConnectionError

logger = logging.getLogger(__name__)


@dataclass
class StubRequest:
    """A request captured by StubTransport."""
    method: str
    url: str
    params: Optional[Dict[str, str]] = None
    body: Optional[str] = None

    def json(self) -> Any:
        """Decode the captured request body."""
        return json.loads(self.body) if self.body else None


@dataclass
class _Route:
    method: str
    match: str
    responses: List[Any] = field(default_factory=list)


class StubTransport(HttpTransport):
    """
    In-memory HttpTransport with scripted responses.

    A route matches when its method equals the request method and its
    match string is contained in the URL. Each call consumes the next
    scripted response. The last one repeats once the others are used
    up. A response may be a JSON value, an exception instance (raised)
    or a callable taking the StubRequest.
    """

    def __init__(self):
        self.routes: List[_Route] = []
        self.requests: List[StubRequest] = []
        self.closed = False

    def add_response(self, method: str, match: str, *responses: Any) -> "StubTransport":
        """
        Script responses for requests whose URL contains match.

        Args:
            method: "GET" or "POST"
            match: Substring of the request URL
            responses: Values returned (or raised) in order

        Returns:
            self, for chaining
        """
        if not responses:
            raise ValueError("At least one response is required")
        self.routes.append(_Route(method.upper(), match, list(responses)))
        return self

    def calls(self, match: str = "") -> List[StubRequest]:
        """Requests whose URL contains match."""
        return [r for r in self.requests if match in r.url]

    def get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        return self._dispatch(StubRequest("GET", url, params=params))

    def post_json(self, url: str, body: str) -> Any:
        return self._dispatch(StubRequest("POST", url, body=body))

    def close(self) -> None:
        self.closed = True

    def _dispatch(self, request: StubRequest) -> Any:
        self.requests.append(request)
        logger.debug(f"StubTransport {request.method} {request.url}")

        for route in self.routes:
            if route.method == request.method and route.match in request.url:
                response = route.responses[0]
                if len(route.responses) > 1:
                    route.responses.pop(0)
                if isinstance(response, BaseException):
                    raise response
                if callable(response):
                    return response(request)
                return response

        raise GatewayConnectionError(f"No stub response for {request.method} {request.url}")
