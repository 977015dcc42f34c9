"""
remote_list.py: Remote list loading with offline fallback.

The network fetch itself lives behind ListRepository; this module defines
its error taxonomy and the feed state a list screen binds to.
"""

import json
import logging
import time
from enum import Enum, auto
from typing import Any, Awaitable, Callable, List, Optional, Protocol

from .constants import CACHE_VALIDITY
from .stats import CounterStore

logger = logging.getLogger(__name__)

CACHE_KEY = "remote_list_cache"
CACHE_TIME_KEY = "remote_list_cached_at"


# ---------- Errors ----------

class ListFetchError(Exception):
    """Base class for failures fetching the remote list."""
    message = "Request failed"

    def __str__(self):
        return self.message


class InvalidURLError(ListFetchError):
    message = "Invalid URL"


class InvalidResponseError(ListFetchError):
    message = "Invalid server response"


class HTTPStatusError(ListFetchError):
    def __init__(self, status_code: int):
        super().__init__(status_code)
        self.status_code = status_code

    @property
    def message(self):
        return f"HTTP error: {self.status_code}"


class DecodingError(ListFetchError):
    def __init__(self, cause: Exception):
        super().__init__(cause)
        self.cause = cause

    @property
    def message(self):
        return f"Decoding error: {self.cause}"


class NoConnectionError(ListFetchError):
    message = "No internet connection"


# ---------- Repository ----------

class ListRepository(Protocol):
    async def fetch_list(self) -> List[Any]: ...

    def get_cached_list(self) -> Optional[List[Any]]: ...

    def cache_list(self, items: List[Any]) -> None: ...


class CachingRepository:
    """
    Wraps a fetch coroutine; successful results are cached.

    With a store, the cached list (as JSON) and its timestamp are written
    through to it, so the offline fallback survives a restart. Items must
    then be JSON serializable.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[List[Any]]],
        clock: Callable[[], float] = time.time,
        validity: float = CACHE_VALIDITY,
        store: Optional[CounterStore] = None,
    ):
        self._fetcher = fetcher
        self._clock = clock
        self.validity = validity
        self.store = store
        self._cached: Optional[List[Any]] = None
        self._cached_at: Optional[float] = None
        if store is not None:
            self._load()

    def _load(self):
        raw = self.store.get_str(CACHE_KEY)
        if raw is None:
            return
        raw_time = self.store.get_str(CACHE_TIME_KEY)
        try:
            items = json.loads(raw)
            cached_at = float(raw_time) if raw_time is not None else None
        except ValueError as e:
            logger.warning(f"Ignoring unreadable list cache: {e}")
            return
        if not isinstance(items, list):
            logger.warning("Ignoring list cache that is not a list")
            return
        self._cached = items
        self._cached_at = cached_at
        logger.debug(f"Loaded {len(items)} cached items")

    async def fetch_list(self) -> List[Any]:
        items = await self._fetcher()
        self.cache_list(items)
        return items

    def get_cached_list(self) -> Optional[List[Any]]:
        return None if self._cached is None else list(self._cached)

    def cache_list(self, items: List[Any]) -> None:
        self._cached = list(items)
        self._cached_at = self._clock()
        if self.store is not None:
            self.store.set_str(CACHE_KEY, json.dumps(self._cached))
            self.store.set_str(CACHE_TIME_KEY, repr(self._cached_at))

    @property
    def cache_age(self) -> Optional[float]:
        if self._cached_at is None:
            return None
        return self._clock() - self._cached_at

    @property
    def is_cache_valid(self) -> bool:
        age = self.cache_age
        return age is not None and age < self.validity


# ---------- Feed ----------

class FeedState(Enum):
    IDLE = auto()
    LOADING = auto()
    LOADED = auto()
    OFFLINE = auto()
    ERROR = auto()


class ListFeed:
    """
    State for a list screen: tries the network first, falls back to cache.

    Each fetch/refresh takes a generation number; a result is applied only
    if no newer request started meanwhile.
    """

    def __init__(self, repository: ListRepository):
        self.repository = repository
        self.state = FeedState.IDLE
        self.items: List[Any] = []
        self.error_message: Optional[str] = None
        self.is_refreshing = False
        self._generation = 0
        self._refresh_generation = 0

    @property
    def is_loading(self) -> bool:
        return self.state is FeedState.LOADING

    @property
    def is_offline(self) -> bool:
        return self.state is FeedState.OFFLINE

    @property
    def show_empty_state(self) -> bool:
        return not self.is_loading and not self.items and self.error_message is None

    def _set(self, state: FeedState, items: List[Any], error: Optional[str] = None):
        self.state = state
        self.items = items
        self.error_message = error

    def _fall_back(self, error: ListFetchError):
        cached = self.repository.get_cached_list()
        if cached:
            logger.warning(f"Fetch failed ({error}); showing {len(cached)} cached items")
            self._set(FeedState.OFFLINE, cached)
        else:
            logger.warning(f"Fetch failed ({error}); no cache available")
            self._set(FeedState.ERROR, [], str(error))

    async def fetch(self):
        if self.is_loading:
            return
        self._generation += 1
        generation = self._generation
        if not self.items:
            self._set(FeedState.LOADING, [])

        try:
            items = await self.repository.fetch_list()
        except ListFetchError as error:
            if generation == self._generation:
                self._fall_back(error)
            return

        if generation == self._generation:
            self._set(FeedState.LOADED, list(items))

    async def refresh(self):
        """Pull-to-refresh: on failure keep whatever is already shown."""
        self._generation += 1
        self._refresh_generation += 1
        generation = self._generation
        refresh_generation = self._refresh_generation
        self.is_refreshing = True
        try:
            items = await self.repository.fetch_list()
        except ListFetchError as error:
            if generation == self._generation and not self.items:
                self._fall_back(error)
        else:
            if generation == self._generation:
                self._set(FeedState.LOADED, list(items))
        finally:
            # Only a newer refresh owns the flag.
            if refresh_generation == self._refresh_generation:
                self.is_refreshing = False

    def load_cached_if_available(self):
        if self.state is not FeedState.IDLE:
            return
        cached = self.repository.get_cached_list()
        if cached:
            self._set(FeedState.OFFLINE, cached)
