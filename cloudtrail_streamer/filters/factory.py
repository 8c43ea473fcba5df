from typing import List

from cloudtrail_streamer.filters.base import EventFilter, FilterLike, FilterSet
from cloudtrail_streamer.utils.logger import logger


class FilterFactory:
    """Factory for creating filter components.

    This factory builds FilterSets either from filter objects or from the
    ``CT_EVENT_FILTERS`` configuration string.
    """

    PAIR_SEPARATOR = ","
    FIELD_SEPARATOR = ":"

    @staticmethod
    def create_filter_set(filters: List[FilterLike]) -> FilterSet:
        """Create a new filter set with the provided filters.

        Args:
            filters: A list of filters to include in the set, evaluated in the
                    order they appear in the list.

        Returns:
            A FilterSet containing the provided filters.
        """
        return FilterSet(filters)

    @classmethod
    def parse(cls, text: str) -> FilterSet:
        """Parse comma separated ``source:eventName`` pairs into a FilterSet.

        Pairs that do not split into exactly two parts are skipped.

        Args:
            text: The raw configuration string, e.g. ``"s3:PutObject,ec2:RunInstances"``.

        Returns:
            The parsed FilterSet, empty when ``text`` is empty.
        """
        filters: List[FilterLike] = []
        if not text or not text.strip():
            return FilterSet(filters)

        for pair in text.split(cls.PAIR_SEPARATOR):
            parts = pair.strip().split(cls.FIELD_SEPARATOR)
            if len(parts) != 2:
                logger.debug(f"Skipping malformed event filter: {pair!r}")
                continue
            source, event_name = parts
            filters.append(EventFilter.from_source(source, event_name))

        return cls.create_filter_set(filters)
