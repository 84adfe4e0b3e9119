"""Test factories for creating test data."""

from tests.factories.upgrade import StubController

__all__ = [
    "StubController",
]
