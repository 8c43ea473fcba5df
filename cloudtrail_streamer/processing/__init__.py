from cloudtrail_streamer.processing.publisher import (
    BatchPublisher,
    PublishResult,
    fixed_partition_key,
    hashed_partition_key,
)
from cloudtrail_streamer.processing.dispatcher import EventDispatcher, object_references
from cloudtrail_streamer.processing.envelope import EnvelopeDispatcher, EnvelopeUnwrapper

__all__ = [
    "BatchPublisher",
    "PublishResult",
    "fixed_partition_key",
    "hashed_partition_key",
    "EventDispatcher",
    "object_references",
    "EnvelopeDispatcher",
    "EnvelopeUnwrapper",
]
