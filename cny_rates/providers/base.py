"""Abstract interface and error taxonomy for rate sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schemas import RateSnapshot


class ProviderError(Exception):
    """Raised when an upstream rate source cannot fulfill a request."""


class ProviderUnavailable(ProviderError):
    """A single market provider failed or returned unusable data."""


class BaseRateProvider(ABC):
    """Defines the interface all market-rate providers must implement."""

    name: str

    @abstractmethod
    def get_latest(self, base: str) -> RateSnapshot:
        """Retrieve the full latest rate table quoted against ``base``."""
