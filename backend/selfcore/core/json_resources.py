"""
JSON resources obtained over HTTP

A JsonResources client performs exactly one HTTP round trip per call and
returns a Resource. Bodies are kept as raw text and decoded only on demand.
"""
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

import httpx

from selfcore.core.access_token import AccessToken
from selfcore.core.config import get_settings
from selfcore.core.errors import MalformedBody, TransportFailure
from selfcore.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

JsonBody = Union[Dict[str, Any], List[Any]]


class Resource(ABC):
    """Normalized HTTP response: status code plus a lazily decoded JSON body"""

    @property
    @abstractmethod
    def status_code(self) -> int:
        pass

    @abstractmethod
    def as_object(self) -> Dict[str, Any]:
        """Decode the body as a JSON object, raising MalformedBody otherwise"""
        pass

    @abstractmethod
    def as_array(self) -> List[Any]:
        """Decode the body as a JSON array, raising MalformedBody otherwise"""
        pass


class JsonResponse(Resource):
    """Resource backed by the raw response text"""

    def __init__(self, status_code: int, body: str = ""):
        self._status_code = status_code
        self._body = body

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> str:
        return self._body

    def _decode(self, expected: type, shape: str):
        try:
            value = json.loads(self._body)
        except (TypeError, ValueError) as e:
            raise MalformedBody(f"Response body is not valid JSON: {e}") from e
        if not isinstance(value, expected):
            raise MalformedBody(
                f"Expected a JSON {shape}, got {type(value).__name__}"
            )
        return value

    def as_object(self) -> Dict[str, Any]:
        return self._decode(dict, "object")

    def as_array(self) -> List[Any]:
        return self._decode(list, "array")

    def __repr__(self):
        return f"<JsonResponse(status_code={self._status_code}, length={len(self._body)})>"


class JsonResources(ABC):
    """Client issuing JSON requests with an optional bound access token"""

    @abstractmethod
    def authenticated(self, access_token: AccessToken) -> "JsonResources":
        """Return a new client which sends the given token with every request"""
        pass

    @abstractmethod
    def get(self, uri: str) -> Resource:
        pass

    @abstractmethod
    def post(self, uri: str, body: JsonBody) -> Resource:
        pass

    @abstractmethod
    def patch(self, uri: str, body: JsonBody) -> Resource:
        pass

    @abstractmethod
    def put(self, uri: str, body: JsonBody) -> Resource:
        pass

    @abstractmethod
    def delete(self, uri: str) -> Resource:
        pass


class HttpJsonResources(JsonResources):
    """
    JSON resources fetched with httpx

    A new httpx.Client is opened for every call, so instances hold no
    connection state and may be shared between threads.
    """

    def __init__(
        self,
        access_token: Optional[AccessToken] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            access_token: Token sent as the Authorization header (None for anonymous calls)
            timeout: Seconds before a call fails (default: settings.http_timeout_seconds)
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests
        """
        self.access_token = access_token
        self.timeout = timeout if timeout is not None else get_settings().http_timeout_seconds
        self._transport = transport

    def authenticated(self, access_token: AccessToken) -> "HttpJsonResources":
        return HttpJsonResources(
            access_token=access_token,
            timeout=self.timeout,
            transport=self._transport,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token is not None:
            headers["Authorization"] = self.access_token.header()
        return headers

    def _send(self, method: str, uri: str, body: Optional[JsonBody] = None) -> Resource:
        content = json.dumps(body) if body is not None else None
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(
                    method,
                    uri,
                    headers=self._headers(),
                    content=content,
                )
        except httpx.TransportError as e:
            logger.error(f"{method} {uri} failed: {e}")
            raise TransportFailure(method, uri, str(e)) from e
        logger.debug(
            f"{method} {uri} -> {response.status_code}",
            extra={"method": method, "uri": uri, "status_code": response.status_code},
        )
        return JsonResponse(response.status_code, response.text)

    def get(self, uri: str) -> Resource:
        return self._send("GET", uri)

    def post(self, uri: str, body: JsonBody) -> Resource:
        return self._send("POST", uri, body)

    def patch(self, uri: str, body: JsonBody) -> Resource:
        return self._send("PATCH", uri, body)

    def put(self, uri: str, body: JsonBody) -> Resource:
        return self._send("PUT", uri, body)

    def delete(self, uri: str) -> Resource:
        return self._send("DELETE", uri)
