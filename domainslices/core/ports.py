"""Port interfaces for the domainslices application.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package (and in tests/fakes/ for testing).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - JsonSourcePort: Read a JSON document from a network endpoint

2. **Service Ports** (domain stores call into fetch services)
   - FetchServicePort: Stateless read facade for one domain's records
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from .models import ValidationResult

R = TypeVar("R")


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class JsonSourcePort(ABC):
    """Port for reading JSON documents from the application's HTTP API.

    Adapters implementing this port perform exactly one request per call
    and never cache responses.
    """

    @abstractmethod
    async def get_json(self, path: str) -> Any:
        """Issue a GET request and return the decoded JSON body.

        Args:
            path: Endpoint path relative to the configured base URL
                (e.g. "/api/users").

        Returns:
            The decoded JSON value (list, dict, str, number, bool or None).

        Raises:
            TransportError: If the endpoint is unreachable, times out,
                or answers with a non-2xx status.
            DecodeError: If the response body is not valid JSON.
        """


# ============================================================================
# SERVICE PORTS (Domain stores call into fetch services)
# ============================================================================


class FetchServicePort(ABC, Generic[R]):
    """Port for the stateless per-domain fetch facade.

    Every operation performs exactly one network read. Lookups that
    find nothing return None or an empty list; they never raise.
    """

    @property
    @abstractmethod
    def domain(self) -> str:
        """Plural domain label used in messages (e.g. "users")."""

    @abstractmethod
    async def fetch_all(self) -> list[R]:
        """Fetch the full collection for this domain.

        Raises:
            FetchError: On any transport or decoding failure.
        """

    @abstractmethod
    async def fetch_by_id(self, identity: Any) -> R | None:
        """Fetch the collection and return the record with this identity.

        Raises:
            FetchError: On any transport or decoding failure.
        """

    @abstractmethod
    async def fetch_by_field(self, path: str, value: Any) -> list[R]:
        """Fetch the collection and keep records whose field equals value.

        Args:
            path: Dotted attribute path, e.g. "author.username".
            value: Value to compare against.

        Raises:
            FetchError: On any transport or decoding failure.
        """

    @abstractmethod
    def validate(self, partial: Mapping[str, Any]) -> ValidationResult:
        """Check that a wire-shaped record carries its required fields."""
