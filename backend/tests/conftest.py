"""
Pytest configuration and fixtures
"""
import json
import os
import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Plain text logs, no log files during tests
os.environ.setdefault("SELFCORE_LOG_FORMAT", "text")
os.environ.setdefault("SELFCORE_LOG_FILE_ENABLED", "false")

from selfcore.core.config import get_settings
from selfcore.core.json_resources import JsonResources, JsonResponse
from selfcore.providers.facades import RepoCoordinates
from selfcore.storage.in_memory import InMemoryStorage


class MockRequest:
    """A request captured by MockJsonResources"""

    def __init__(self, access_token, method, uri, body):
        self.access_token = access_token
        self.method = method
        self.uri = uri
        self.body = body

    def __repr__(self):
        return f"<MockRequest({self.method} {self.uri})>"


class MockJsonResources(JsonResources):
    """JsonResources answering every request with a handler, recording what was sent"""

    def __init__(self, handler, access_token=None, requests=None):
        self.handler = handler
        self.access_token = access_token
        self.requests = requests if requests is not None else []

    def authenticated(self, access_token):
        return MockJsonResources(self.handler, access_token, self.requests)

    def _handle(self, method, uri, body=None):
        request = MockRequest(self.access_token, method, uri, body)
        self.requests.append(request)
        return self.handler(request)

    def get(self, uri):
        return self._handle("GET", uri)

    def post(self, uri, body):
        return self._handle("POST", uri, body)

    def patch(self, uri, body):
        return self._handle("PATCH", uri, body)

    def put(self, uri, body):
        return self._handle("PUT", uri, body)

    def delete(self, uri):
        return self._handle("DELETE", uri)


def respond(status_code, body=None):
    """JsonResponse with a JSON-encoded body ({} by default)"""
    return JsonResponse(status_code, json.dumps({} if body is None else body))


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are re-read for every test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_resources():
    """Build a MockJsonResources from a handler, or from a fixed status and body"""
    def _build(handler=None, status_code=200, body=None):
        if handler is None:
            def handler(request):
                return respond(status_code, body)
        return MockJsonResources(handler)
    return _build


@pytest.fixture
def storage():
    """In-memory storage whose providers answer 404 to everything"""
    return InMemoryStorage(MockJsonResources(lambda request: JsonResponse(404, "null")))


@pytest.fixture
def project_manager(storage):
    return storage.project_managers().register("123", "zoeself", "github", "pm-token")


@pytest.fixture
def register_project(storage, project_manager):
    """Register a GitHub repo of amihaiemil as a project"""
    def _register(name):
        return storage.projects().register(
            RepoCoordinates(owner="amihaiemil", name=name, provider="github"),
            project_manager,
        )
    return _register
