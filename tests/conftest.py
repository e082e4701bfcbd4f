# Area: Tests
"""Shared fixtures: an in-memory stand-in for the remote strength API."""

import logging

import pytest


class FakeCoyoteApi:
    """
    Records requests and keeps a strength value like the remote service.

    ``get_failures`` holds 1-based GET call numbers that return None.
    ``on_post`` runs after every POST, e.g. to simulate another writer.
    """

    def __init__(self, host="http://coyote.test", client_id="client-1",
                 timeout=5.0, strength=10):
        self.host = host.rstrip("/")
        self.client_id = client_id
        self.timeout = timeout
        self.strength = strength
        self.random_strength = 0
        self.posts = []
        self.get_calls = 0
        self.get_failures = set()
        self.on_post = None

    async def set_strength_config(self, request):
        self.posts.append(request)
        self.strength = _apply(self.strength, request.get("strength"))
        self.random_strength = _apply(self.random_strength, request.get("randomStrength"))
        if self.on_post is not None:
            self.on_post(self)
        return self.client_id

    async def get_strength_config(self):
        self.get_calls += 1
        if self.get_calls in self.get_failures:
            return None
        return {
            "strength": self.strength,
            "randomStrength": self.random_strength,
            "minInterval": 10,
            "maxInterval": 20,
            "pulseId": "p1",
        }


def _apply(value, change):
    if not change:
        return value
    if "set" in change:
        return change["set"]
    return value + change.get("add", 0) - change.get("sub", 0)


@pytest.fixture
def fake_api():
    return FakeCoyoteApi()


@pytest.fixture
def api_factory():
    """Factory usable as CoyoteController(api_factory=...); keeps every client."""
    created = []

    def factory(host, client_id, timeout):
        api = FakeCoyoteApi(host=host, client_id=client_id, timeout=timeout)
        created.append(api)
        return api

    factory.created = created
    return factory


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    pkg_logger = logging.getLogger("majsoul_coyote")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)
