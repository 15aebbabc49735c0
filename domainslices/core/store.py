"""Domain store: reactive container for one domain's fetched collection.

The store exclusively owns its collection and its loading/error flags.
fetch() is the only mutator and replaces the collection by reference, so
readers never observe a partially updated list. Queries are synchronous
views over the current snapshot.

Requests are sequenced: each fetch() takes a new request number and only
the most recent request may publish its outcome. cancel() invalidates
whatever is in flight.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .fetch_service import resolve_field
from .models import StoreState
from .ports import FetchServicePort

logger = logging.getLogger(__name__)

R = TypeVar("R")

StoreListener = Callable[[StoreState[Any]], None]


class DomainStore(Generic[R]):
    """Holds a fetched collection plus loading/error state.

    State machine:
        Idle (loading=False, error=None)
        -> Fetching (loading=True, error=None)
        -> Idle on success (collection replaced)
        -> Idle with error (error=message, collection unchanged)
    """

    def __init__(
        self,
        service: FetchServicePort[R],
        identity: Callable[[R], Any],
    ):
        """Initialize an empty store.

        Args:
            service: Fetch service providing this domain's records.
            identity: Returns the identity value of a record.
        """
        self.service = service
        self.identity = identity
        self._collection: tuple[R, ...] = ()
        self._loading = False
        self._error: str | None = None
        self._request_seq = 0
        self._listeners: list[StoreListener] = []

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def collection(self) -> tuple[R, ...]:
        return self._collection

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def count(self) -> int:
        return len(self._collection)

    @property
    def state(self) -> StoreState[R]:
        """Current snapshot of collection and flags."""
        return StoreState(
            collection=self._collection,
            loading=self._loading,
            error=self._error,
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    async def fetch(self) -> None:
        """Refresh the collection from the fetch service.

        Never raises on fetch failure: the failure message is stored in
        ``error`` and the previous collection stays available. If the task
        running this coroutine is cancelled, CancelledError propagates.
        """
        self._request_seq += 1
        request = self._request_seq
        self._loading = True
        self._error = None
        self._notify()

        try:
            records = await self.service.fetch_all()
        except asyncio.CancelledError:
            if request == self._request_seq:
                self._loading = False
                self._notify()
            raise
        except Exception as e:
            if request != self._request_seq:
                logger.debug(
                    f"Discarding stale {self.service.domain} failure "
                    f"(request {request}, latest {self._request_seq}): {e}"
                )
                return
            logger.error(f"{self.service.domain.capitalize()} fetch error: {e}", exc_info=True)
            self._error = str(e) or f"Failed to fetch {self.service.domain}"
            self._loading = False
            self._notify()
            return

        if request != self._request_seq:
            logger.debug(
                f"Discarding stale {self.service.domain} response "
                f"(request {request}, latest {self._request_seq})"
            )
            return

        self._collection = tuple(records)
        self._loading = False
        self._notify()
        logger.debug(f"Loaded {len(records)} {self.service.domain}")

    def cancel(self) -> None:
        """Invalidate any in-flight fetch.

        The pending request still runs to completion in the background,
        but its result or failure is discarded.
        """
        if not self._loading:
            return
        self._request_seq += 1
        self._loading = False
        self._notify()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener called with a StoreState after every change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Store listener failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_id(self, identity: Any) -> R | None:
        """Return the record with this identity, or None."""
        for record in self._collection:
            if self.identity(record) == identity:
                return record
        return None

    def filter_by_field(self, path: str, value: Any) -> list[R]:
        """Return records whose dotted field path equals value, in order."""
        return [
            record
            for record in self._collection
            if resolve_field(record, path) == value
        ]
