from typing import Optional


class StreamerError(Exception):
    """Base exception for all CloudTrail streamer related errors.

    Every error carries a ``kind`` tag and an optional ``cause`` holding the
    underlying exception, so callers can branch on the kind without knowing
    which client library produced the failure.
    """

    kind = "streamer"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(StreamerError):
    """Raised when there is an issue with configuration settings."""

    kind = "config"


class UnsupportedTypeError(ConfigurationError):
    """Raised when an unsupported type is requested from a factory."""

    pass


class FetchError(StreamerError):
    """Raised when an object cannot be read from the object store."""

    kind = "fetch"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, cause)
        self.code = code


class DecodeError(StreamerError):
    """Raised when a compressed stream, a log file or an envelope is malformed."""

    kind = "decode"


class EncodeError(StreamerError):
    """Raised when a single record cannot be encoded for the stream."""

    kind = "encode"


class StreamError(StreamerError):
    """Raised when there is an issue with a stream operation."""

    kind = "stream"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, cause)
        self.code = code


class PublishError(StreamerError):
    """Raised when a batch could not be published, wholly or partially."""

    kind = "publish"
