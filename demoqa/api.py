"""
Objects API client with a rate-limit fallback.

restful-api.dev answers HTTP 405 with ``{"error": "... limit ..."}`` once the
daily quota is spent. The first time any call sees that answer the fallback
context switches to *limited* for the rest of the run, and objects created
from then on live in a process-local store that mimics the API's responses,
so a create -> read -> update -> delete lifecycle stays self-consistent.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
JSON_HEADERS = {"content-type": "application/json"}
RATE_LIMIT_RE = re.compile(r"limit", re.IGNORECASE)
PLACEHOLDER_OBJECTS = [{"id": "1"}, {"id": "2"}, {"id": "3"}]


class ApiResponse:
    """Status, body and headers of the last call (real or synthesized)."""

    def __init__(self, status: int, body: Any = None, headers: Optional[Dict[str, str]] = None,
                 duration_ms: Optional[float] = None, mocked: bool = False):
        self.status = status
        self.body = body
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.duration_ms = duration_ms
        self.mocked = mocked

    @classmethod
    def from_requests(cls, resp: requests.Response) -> "ApiResponse":
        """Wrap a requests response; non-JSON bodies are kept as text."""
        try:
            body = resp.json()
        except ValueError:
            body = resp.text
        return cls(
            resp.status_code,
            body,
            dict(resp.headers),
            duration_ms=resp.elapsed.total_seconds() * 1000,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str:
        return str(self.headers.get(name.lower(), ""))

    def __repr__(self):
        kind = "mock" if self.mocked else "real"
        return f"<ApiResponse {self.status} {kind}>"


def is_rate_limited(response: ApiResponse) -> bool:
    """405 with a string ``error`` field mentioning "limit"."""
    if response.status != 405 or not isinstance(response.body, dict):
        return False
    error = response.body.get("error")
    return isinstance(error, str) and bool(RATE_LIMIT_RE.search(error))


######################################################################
# Fallback store
######################################################################
class MockObject:
    """An object held locally once the API is rate limited."""

    def __init__(self, object_id: str, name: str, data: Optional[Dict[str, Any]] = None):
        self.id = object_id
        self.name = name
        self.data = dict(data or {})
        self.deleted = False

    def serialize(self) -> dict:
        return {"id": self.id, "name": self.name, "data": dict(self.data)}

    def __repr__(self):
        return f"<MockObject {self.name} id=[{self.id}] deleted={self.deleted}>"


def generate_mock_id() -> str:
    return f"mock-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


class ApiFallbackContext:
    """Process-wide rate-limit flag and mock object store.

    Once limited, the context never goes back to normal within a run.
    """

    def __init__(self):
        self.rate_limited = False
        self.objects: Dict[str, MockObject] = {}

    def observe(self, response: ApiResponse) -> bool:
        """Record a real response; returns whether it was rate limited."""
        if not is_rate_limited(response):
            return False
        if not self.rate_limited:
            logger.warning("Objects API is rate limited; switching to the local mock store")
        self.rate_limited = True
        return True

    def create(self, name: str, data: Optional[Dict[str, Any]] = None) -> MockObject:
        obj = MockObject(generate_mock_id(), name, data)
        self.objects[obj.id] = obj
        logger.info("Created mock object %s", obj)
        return obj

    def lookup(self, object_id: str) -> Optional[MockObject]:
        """Known mock object (deleted or not) while limited, else None."""
        if not self.rate_limited:
            return None
        return self.objects.get(object_id)

    def live_objects(self):
        return [obj.serialize() for obj in self.objects.values() if not obj.deleted]


def mock_response(status: int, body: Any) -> ApiResponse:
    return ApiResponse(status, body, JSON_HEADERS, mocked=True)


def not_found(message: str = "Not found") -> ApiResponse:
    return mock_response(404, {"message": message})


######################################################################
# Client
######################################################################
class ObjectsClient:
    """CRUD on ``/objects`` that falls back to ``ApiFallbackContext``."""

    def __init__(self, base_url: str, fallback: ApiFallbackContext,
                 session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.fallback = fallback
        self.session = session or requests.Session()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return self.base_url + path

    def request(self, method: str, path: str, body: Optional[dict] = None) -> ApiResponse:
        """One real HTTP call; never raises on the status code."""
        logger.info("%s %s", method, self.url(path))
        resp = self.session.request(method, self.url(path), json=body, timeout=self.timeout)
        response = ApiResponse.from_requests(resp)
        self.fallback.observe(response)
        return response

    @staticmethod
    def _expect_ok(response: ApiResponse, method: str, path: str) -> ApiResponse:
        if not response.ok:
            raise AssertionError(f"{method} {path} failed with {response.status}: {response.body!r}")
        return response

    def _by_id(self, method: str, object_id: str, body: Optional[dict], allow_failure: bool) -> ApiResponse:
        path = f"/objects/{object_id}"
        response = self.request(method, path, body)
        if is_rate_limited(response):
            return not_found("Not found (rate-limited)")
        if allow_failure:
            return response
        return self._expect_ok(response, method, path)

    ##################################################
    # Operations
    ##################################################

    def create(self, name: str, data: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """POST /objects; a rate-limited answer yields a 201 mock object."""
        body = {"name": name, "data": dict(data or {})}
        if self.fallback.rate_limited:
            return mock_response(201, self.fallback.create(name, body["data"]).serialize())
        response = self.request("POST", "/objects", body)
        if is_rate_limited(response):
            return mock_response(201, self.fallback.create(name, body["data"]).serialize())
        if response.status not in (200, 201):
            raise AssertionError(f"POST /objects expected 200 or 201, got {response.status}: {response.body!r}")
        return response

    def get(self, object_id: str, allow_failure: bool = False) -> ApiResponse:
        """GET /objects/<id>; unknown ids fall through to the real API."""
        obj = self.fallback.lookup(object_id)
        if obj is not None:
            return not_found() if obj.deleted else mock_response(200, obj.serialize())
        return self._by_id("GET", object_id, None, allow_failure)

    def update_name(self, object_id: str, name: str, allow_failure: bool = False) -> ApiResponse:
        """PUT /objects/<id> with a new name."""
        obj = self.fallback.lookup(object_id)
        if obj is not None:
            if obj.deleted:
                return mock_response(404, {})
            obj.name = name
            return mock_response(200, obj.serialize())
        return self._by_id("PUT", object_id, {"name": name}, allow_failure)

    def patch(self, object_id: str, data: Dict[str, Any], allow_failure: bool = False) -> ApiResponse:
        """PATCH /objects/<id>, merging ``data`` into the object's data."""
        obj = self.fallback.lookup(object_id)
        if obj is not None:
            if obj.deleted:
                return mock_response(404, {})
            obj.data.update(data)
            return mock_response(200, obj.serialize())
        return self._by_id("PATCH", object_id, {"data": dict(data)}, allow_failure)

    def delete(self, object_id: str, allow_failure: bool = False) -> ApiResponse:
        """DELETE /objects/<id>; mock objects are soft deleted."""
        obj = self.fallback.lookup(object_id)
        if obj is not None:
            if obj.deleted:
                return mock_response(404, {})
            obj.deleted = True
            logger.info("Deleted mock object %s", obj.id)
            return mock_response(200, {"deleted": True})
        return self._by_id("DELETE", object_id, None, allow_failure)

    def list_all(self) -> ApiResponse:
        """GET /objects; rate limited -> placeholders plus live mock objects."""
        if not self.fallback.rate_limited:
            response = self.request("GET", "/objects")
            if not is_rate_limited(response):
                return response
        return mock_response(200, [dict(item) for item in PLACEHOLDER_OBJECTS] + self.fallback.live_objects())

    def get_mock(self, object_id: str) -> ApiResponse:
        """Tolerant GET; a rate-limited unknown id gets a synthesized object."""
        obj = self.fallback.lookup(object_id)
        if obj is not None:
            return not_found() if obj.deleted else mock_response(200, obj.serialize())
        response = self.request("GET", f"/objects/{object_id}")
        if is_rate_limited(response):
            return mock_response(200, {"id": object_id, "name": "Mock Object", "data": {}})
        return response
