from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Protocol, Tuple

# Creates an alias for record type
Record = Dict[str, Any]

EVENT_NAME_FIELD = "eventName"
EVENT_SOURCE_FIELD = "eventSource"
EVENT_SOURCE_SUFFIX = ".amazonaws.com"


class FilterLike(Protocol):
    """Protocol for objects with matches method compatibility.

    This protocol defines the interface for anything that behaves like a filter,
    which makes it compatible with both EventFilter and test doubles that
    implement the same interface.
    """

    def matches(self, record: Record) -> bool:
        """Return True when the record should be excluded from publication."""
        ...


@dataclass(frozen=True)
class EventFilter:
    """Rule excluding records by event name or by event source.

    A record matches when its ``eventName`` equals ``event_name`` or its
    ``eventSource`` equals ``event_source``. Missing fields never match.
    """

    event_name: str
    event_source: str

    @classmethod
    def from_source(cls, source: str, event_name: str) -> "EventFilter":
        """Build a filter from a short service code such as ``s3``."""
        return cls(event_name=event_name, event_source=f"{source}{EVENT_SOURCE_SUFFIX}")

    def matches(self, record: Record) -> bool:
        return (
            record.get(EVENT_NAME_FIELD) == self.event_name
            or record.get(EVENT_SOURCE_FIELD) == self.event_source
        )


class FilterSet:
    """An ordered, immutable collection of filters combined with logical OR.

    An empty FilterSet never matches, so nothing is excluded.
    """

    def __init__(self, filters: Iterable[FilterLike] = ()):
        self._filters: Tuple[FilterLike, ...] = tuple(filters)

    @property
    def filters(self) -> Tuple[FilterLike, ...]:
        return self._filters

    def matches(self, record: Record) -> bool:
        """Return True if any member filter matches the record."""
        return any(f.matches(record) for f in self._filters)

    def __iter__(self) -> Iterator[FilterLike]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        return f"FilterSet({list(self._filters)!r})"
