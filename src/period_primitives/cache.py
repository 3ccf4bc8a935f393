"""Layer 3: Cache — partial coverage tracking with gap detection.

The cache remembers two things: the data it holds, and every key it has
already asked for (whether or not that key produced data). A request is
answered only when every key in it was asked for before; otherwise the
caller receives the minimal contiguous groups still to fetch.

Not synchronised: callers must serialise ``add`` against ``add`` and
``get``, e.g. with a single writer or a reader/writer lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Hashable, Iterable, Mapping, TypeVar, Union

from period_primitives.types import NonMatchingDataError

if TYPE_CHECKING:
    from period_primitives.range import TimeRange

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@dataclass(frozen=True)
class CacheHit(Generic[K, T]):
    """Every requested key was already requested before.

    ``data`` holds the cached values between the smallest and largest
    requested key, inclusive, in key order. Keys inside those bounds are
    returned even if they were not themselves requested.
    """

    data: dict[K, T]


@dataclass(frozen=True)
class CacheMiss(Generic[K]):
    """Some keys are unknown. ``pieces`` are the groups to fetch, ascending."""

    pieces: list[list[K]]


CacheResponse = Union[CacheHit, CacheMiss]


def missing_pieces(request: Iterable[K], known_requests: Iterable[K]) -> list[list[K]]:
    """Group the unknown keys of a contiguous request into runs.

    Walks ``request`` in ascending order; each already-known key closes
    the current group. The request must be contiguous (e.g. a range's
    index set) for every group to be contiguous.
    """
    known = known_requests if isinstance(known_requests, (set, frozenset)) else set(known_requests)
    pieces: list[list[K]] = []
    current: list[K] = []

    for key in sorted(set(request)):
        if key not in known:
            current.append(key)
        elif current:
            pieces.append(current)
            current = []

    if current:
        pieces.append(current)
    return pieces


@dataclass
class Cache(Generic[K, T]):
    """Mutable record of fetched keys and their data. Grows via ``add``.

    Invariant (not enforced): every key in the data was also requested.
    With ``strict=True``, re-adding a key with a different value raises
    NonMatchingDataError instead of overwriting.
    """

    strict: bool = False
    _data: dict[Any, Any] = field(default_factory=dict, init=False)
    _requests: set[Any] = field(default_factory=set, init=False)

    @classmethod
    def empty(cls, strict: bool = False) -> Cache[K, T]:
        return cls(strict=strict)

    @property
    def known_requests(self) -> frozenset[K]:
        return frozenset(self._requests)

    def __len__(self) -> int:
        """Number of cached data points."""
        return len(self._data)

    def get(self, request: Iterable[K]) -> CacheResponse:
        """Answer a request from the cache, or list what must be fetched."""
        keys = set(request)
        if not keys:
            return CacheHit({})

        if keys <= self._requests:
            lo, hi = min(keys), max(keys)
            data = {k: self._data[k] for k in sorted(self._data) if lo <= k <= hi}
            logger.debug(
                "cache hit: %d keys requested, %d values in [%r, %r]",
                len(keys), len(data), lo, hi,
            )
            return CacheHit(data)

        pieces = missing_pieces(keys, self._requests)
        logger.debug(
            "cache miss: %d keys requested, %d pieces to fetch", len(keys), len(pieces)
        )
        return CacheMiss(pieces)

    def get_range(self, time_range: TimeRange) -> CacheResponse:
        """``get`` for every index of a range."""
        return self.get(time_range.to_indexes())

    def add(self, request_range: Iterable[K], data: Mapping[K, T]) -> None:
        """Record a completed request and the data it produced.

        Existing values are overwritten, unless the cache is strict, in
        which case any differing value aborts the whole add.
        """
        requested = set(request_range)

        if self.strict:
            for point, new in data.items():
                if point in self._data and self._data[point] != new:
                    logger.warning(
                        "conflicting data for %r: cached %r, got %r",
                        point, self._data[point], new,
                    )
                    raise NonMatchingDataError(point, self._data[point], new)

        self._requests |= requested
        self._data.update(data)
        logger.debug(
            "cache add: %d keys requested, %d values stored", len(requested), len(data)
        )
