from unittest.mock import MagicMock

from cloudtrail_streamer.filters.base import EventFilter, FilterSet, FilterLike
from cloudtrail_streamer.filters.factory import FilterFactory


class TestEventFilter:
    """Test suite for the EventFilter class."""

    def test_from_source_appends_domain_suffix(self):
        """Test that the short source code becomes a full event source."""
        event_filter = EventFilter.from_source("s3", "PutObject")

        assert event_filter.event_name == "PutObject"
        assert event_filter.event_source == "s3.amazonaws.com"

    def test_matches_on_event_source_with_different_name(self):
        event_filter = EventFilter.from_source("s3", "PutObject")
        record = {"eventSource": "s3.amazonaws.com", "eventName": "GetObject"}

        assert event_filter.matches(record)

    def test_matches_on_event_name_with_different_source(self):
        event_filter = EventFilter.from_source("s3", "PutObject")
        record = {"eventSource": "ec2.amazonaws.com", "eventName": "PutObject"}

        assert event_filter.matches(record)

    def test_no_match_when_neither_field_equal(self):
        event_filter = EventFilter.from_source("s3", "PutObject")
        record = {"eventSource": "ec2.amazonaws.com", "eventName": "RunInstances"}

        assert not event_filter.matches(record)

    def test_missing_fields_never_match(self):
        """Test that records without the well-known fields are not matched."""
        event_filter = EventFilter.from_source("s3", "PutObject")

        assert not event_filter.matches({})
        assert not event_filter.matches({"foo": "bar"})

    def test_match_is_exact(self):
        event_filter = EventFilter.from_source("s3", "PutObject")

        assert not event_filter.matches({"eventName": "putobject"})
        assert not event_filter.matches({"eventSource": "s3.amazonaws.com "})

    def test_non_string_values_do_not_match(self):
        event_filter = EventFilter.from_source("s3", "PutObject")

        assert not event_filter.matches({"eventName": None, "eventSource": 3})


class TestFilterSet:
    """Test suite for the FilterSet class."""

    def test_empty_set_matches_nothing(self):
        filter_set = FilterSet()

        assert not filter_set.matches({"eventName": "PutObject"})
        assert not filter_set.matches({})
        assert len(filter_set) == 0

    def test_matches_if_any_member_matches(self):
        filter_set = FilterSet(
            [
                EventFilter.from_source("ec2", "RunInstances"),
                EventFilter.from_source("s3", "PutObject"),
            ]
        )

        assert filter_set.matches({"eventSource": "s3.amazonaws.com"})
        assert filter_set.matches({"eventName": "RunInstances"})
        assert not filter_set.matches(
            {"eventSource": "iam.amazonaws.com", "eventName": "CreateUser"}
        )

    def test_stops_at_first_matching_filter(self):
        first = MagicMock()
        first.matches.return_value = True
        second = MagicMock()

        filter_set = FilterSet([first, second])

        assert filter_set.matches({"eventName": "x"})
        second.matches.assert_not_called()

    def test_works_with_any_filterlike(self):
        """Test that FilterSet accepts any object implementing matches."""

        class CustomFilter:
            def matches(self, record):
                return record.get("readOnly") is True

        def accepts_filterlike(f: FilterLike) -> bool:
            return True

        custom = CustomFilter()
        assert accepts_filterlike(custom)

        filter_set = FilterSet([custom])
        assert filter_set.matches({"readOnly": True})
        assert not filter_set.matches({"readOnly": False})

    def test_filters_are_immutable(self):
        filters = [EventFilter.from_source("s3", "PutObject")]
        filter_set = FilterSet(filters)

        filters.append(EventFilter.from_source("ec2", "RunInstances"))

        assert len(filter_set) == 1
        assert isinstance(filter_set.filters, tuple)
