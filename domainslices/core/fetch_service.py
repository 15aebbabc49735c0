"""Generic fetch service shared by every domain.

A FetchService is a constructed, stateless value: it knows one endpoint
path, how to turn a wire object into a record, and how to read a record's
identity. It holds no collection of its own; caching belongs to the
domain store.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from .errors import DecodeError, FetchError, TransportError
from .models import ValidationResult
from .ports import FetchServicePort, JsonSourcePort

logger = logging.getLogger(__name__)

R = TypeVar("R")

_MISSING = object()


def resolve_field(record: Any, path: str) -> Any:
    """Follow a dotted attribute path on a record.

    Works on objects and mappings alike. Returns a private sentinel when any
    step of the path is missing or None, so absent values never compare
    equal to anything.
    """
    current = record
    for part in path.split("."):
        if current is None:
            return _MISSING
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        else:
            current = getattr(current, part, _MISSING)
        if current is _MISSING:
            return _MISSING
    return _MISSING if current is None else current


def check_required(
    partial: Mapping[str, Any], required: Sequence[str]
) -> ValidationResult:
    """Report required fields that are missing or falsy.

    Dotted names ("author.username") are resolved through nested mappings.
    """
    missing = tuple(
        name for name in required if not _present(resolve_field(partial, name))
    )
    return ValidationResult(missing_fields=missing)


def _present(value: Any) -> bool:
    if value is _MISSING:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


class FetchService(FetchServicePort[R]):
    """Reads one domain's records through a JsonSourcePort.

    Every public operation issues exactly one request. Lookups scan the
    freshly fetched list linearly, which is fine for collections of tens of
    records.
    """

    def __init__(
        self,
        source: JsonSourcePort,
        path: str,
        domain: str,
        decoder: Callable[[Mapping[str, Any]], R],
        identity: Callable[[R], Any],
        required_fields: Sequence[str] = (),
        item_label: str | None = None,
    ):
        """Initialize the fetch service.

        Args:
            source: Adapter performing the network read.
            path: Endpoint path, e.g. "/api/users".
            domain: Plural label used in failure messages.
            decoder: Maps one wire object to a record.
            identity: Returns the identity value of a record.
            required_fields: Fields checked by validate().
            item_label: Singular label used when a lookup fails
                (defaults to the domain label).
        """
        self.source = source
        self.path = path
        self._domain = domain
        self.decoder = decoder
        self.identity = identity
        self.required_fields = tuple(required_fields)
        self.item_label = item_label or domain

    @property
    def domain(self) -> str:
        return self._domain

    async def fetch_all(self) -> list[R]:
        """Fetch and decode the full collection.

        Raises:
            FetchError: Wrapping the TransportError or DecodeError that
                caused the failure.
        """
        try:
            payload = await self.source.get_json(self.path)
            return self._decode(payload)
        except (TransportError, DecodeError) as e:
            logger.warning(f"Fetching {self.domain} from {self.path} failed: {e}")
            raise FetchError(self.domain, e) from e

    async def fetch_by_id(self, identity: Any) -> R | None:
        """Fetch the collection and return the record with this identity.

        Raises:
            FetchError: Naming the looked-up record, e.g. "Failed to fetch
                post 3: Failed to fetch posts: ...".
        """
        try:
            records = await self.fetch_all()
        except FetchError as e:
            raise FetchError(
                self.domain, e, subject=f"{self.item_label} {identity}"
            ) from e
        for record in records:
            if self.identity(record) == identity:
                return record
        return None

    async def fetch_by_field(self, path: str, value: Any) -> list[R]:
        try:
            records = await self.fetch_all()
        except FetchError as e:
            raise FetchError(
                self.domain, e, subject=f"{self.domain} with {path} = {value}"
            ) from e
        return [record for record in records if resolve_field(record, path) == value]

    def validate(self, partial: Mapping[str, Any]) -> ValidationResult:
        return check_required(partial, self.required_fields)

    def _decode(self, payload: Any) -> list[R]:
        if not isinstance(payload, list):
            raise DecodeError(
                f"expected a JSON array from {self.path}, got {type(payload).__name__}"
            )

        records: list[R] = []
        for index, item in enumerate(payload):
            if not isinstance(item, Mapping):
                raise DecodeError(
                    f"item {index} from {self.path} is not an object"
                )
            try:
                records.append(self.decoder(item))
            except (KeyError, TypeError, ValueError) as e:
                raise DecodeError(
                    f"item {index} from {self.path} is malformed: {e}"
                ) from e
        return records
