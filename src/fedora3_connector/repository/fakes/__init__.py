# Fake implementations for testing

from .fake_repository import FakeRepositoryClient

__all__ = ["FakeRepositoryClient"]
