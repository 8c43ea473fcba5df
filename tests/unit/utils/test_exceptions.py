import pytest
from cloudtrail_streamer.utils.exceptions import (
    StreamerError,
    ConfigurationError,
    UnsupportedTypeError,
    FetchError,
    DecodeError,
    EncodeError,
    StreamError,
    PublishError,
)


@pytest.mark.parametrize(
    "error_class,kind",
    [
        (ConfigurationError, "config"),
        (UnsupportedTypeError, "config"),
        (FetchError, "fetch"),
        (DecodeError, "decode"),
        (EncodeError, "encode"),
        (StreamError, "stream"),
        (PublishError, "publish"),
    ],
)
def test_errors_are_tagged_by_kind(error_class, kind):
    error = error_class("message")

    assert isinstance(error, StreamerError)
    assert error.kind == kind
    assert error.cause is None
    assert str(error) == "message"


def test_cause_is_kept():
    cause = StreamError("throttled", code="ProvisionedThroughputExceededException")
    error = PublishError("batch rejected", cause=cause)

    assert error.cause is cause
    assert error.cause.code == "ProvisionedThroughputExceededException"
