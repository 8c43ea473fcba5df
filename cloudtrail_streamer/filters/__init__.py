"""Filter module for excluding CloudTrail records from the stream.

Key components:
- EventFilter: Rule matching records by event name or event source
- FilterSet: Ordered collection of filters combined with logical OR
- FilterFactory: Factory building FilterSets from configuration strings
"""

from cloudtrail_streamer.filters.base import (
    Record,
    EventFilter,
    FilterLike,
    FilterSet,
)
from cloudtrail_streamer.filters.factory import FilterFactory

__all__ = [
    "Record",
    "EventFilter",
    "FilterLike",
    "FilterSet",
    "FilterFactory",
]
