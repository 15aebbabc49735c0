"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without a network:

- FakeJsonSource: Canned JSON payloads per path, injectable failures
- FakeFetchService: Controllable fetch results, including blocking fetches
"""

from .fetch_service import FakeFetchService
from .source import FakeJsonSource

__all__ = [
    "FakeFetchService",
    "FakeJsonSource",
]
