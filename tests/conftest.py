"""Pytest configuration and shared fixtures for route-client-core tests."""

import copy

import httpx
import pytest

from route_client_core.api.base import forward, json_forward
from route_client_core.testing import RecordingTransport, build_client

SCHEMA = {
    "defines": {
        "constants": {
            "name": "Example",
            "protocol": "https",
            "host": "api.example.com",
            "port": 443,
            "requestFormat": "json",
            "requestMedia": "application/vnd.example+json",
        },
        "params": {
            "page": {"type": "Number", "validation": "^[0-9]+$"},
            "per_page": {"type": "Number"},
            "user": {"type": "String", "required": True},
            "repo": {"type": "String", "required": True},
        },
        "request-headers": ["If-Modified-Since", "If-None-Match", "Cookie", "User-Agent", "Accept", "X-GitHub-OTP"],
    },
    "repos": {
        "get-all": {
            "url": "/user/repos",
            "method": "GET",
            "params": {"$page": None, "$per_page": None, "type": {"type": "String"}},
        },
        "get": {
            "url": "/repos/:user/:repo",
            "method": "GET",
            "params": {"$user": None, "$repo": None},
        },
        "create": {
            "url": "/user/repos",
            "method": "POST",
            "params": {
                "name": {"type": "String", "required": True},
                "private": {"type": "Boolean"},
                "auto_init": {"type": "Boolean"},
            },
        },
        "delete": {
            "url": "/repos/:user/:repo",
            "method": "DELETE",
            "params": {"$user": None, "$repo": None},
        },
        "collaborators": {
            "add": {
                "url": "/repos/:user/:repo/collaborators/:collabuser",
                "method": "PUT",
                "params": {"$user": None, "$repo": None, "collabuser": {"required": True}},
            }
        },
    },
    "search": {
        "issues": {
            "url": "/search/issues",
            "method": "GET",
            "params": {"q": {"required": True, "combined": True}, "$page": None},
        }
    },
    "markdown": {
        "render-raw": {
            "url": "/markdown/raw",
            "method": "POST",
            "requestFormat": "raw",
            "request-headers": ["Content-Language"],
            "params": {"data": {"required": True}},
        },
        "render-form": {
            "url": "/markdown",
            "method": "POST",
            "requestFormat": "form",
            "params": {"text": {"required": True}, "mode": {}},
        },
    },
    "releases": {
        "upload-asset": {
            "url": "/repos/:user/:repo/releases/:id/assets",
            "method": "POST",
            "host": "uploads.example.com",
            "hasFileBody": True,
            "timeout": 2500,
            "params": {
                "$user": None,
                "$repo": None,
                "id": {"type": "Number", "required": True},
                "filePath": {"required": True},
                "name": {"required": True},
            },
        }
    },
}

SECTIONS = {
    "repos": {
        "getAll": forward,
        "get": json_forward,
        "create": json_forward,
        "delete": forward,
        "collaboratorsAdd": forward,
    },
    "search": {"issues": json_forward},
    "markdown": {"renderRaw": forward, "renderForm": forward},
    "releases": {"uploadAsset": forward},
}


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear proxy and test-related environment variables before each test."""
    import os

    test_prefixes = ("TEST_", "ROUTE_CLIENT_")
    proxy_vars = ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy")

    for key in list(os.environ.keys()):
        if key in proxy_vars or any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def schema():
    """A fresh copy of the example route schema."""
    return copy.deepcopy(SCHEMA)


@pytest.fixture
def sections():
    return {name: dict(functions) for name, functions in SECTIONS.items()}


@pytest.fixture
def transport():
    """Recording transport answering 200 with a small JSON body."""
    return RecordingTransport(lambda request: httpx.Response(200, json={"ok": True}))


@pytest.fixture
def client(schema, sections, transport):
    return build_client(schema, sections, transport=transport)
