from dataclasses import dataclass, field
from typing import Any, Dict, List
from cloudtrail_streamer.config.loader import AppConfig
from cloudtrail_streamer.filters.base import FilterSet
from cloudtrail_streamer.filters.factory import FilterFactory
from cloudtrail_streamer.processing.dispatcher import EventDispatcher
from cloudtrail_streamer.processing.envelope import EnvelopeDispatcher
from cloudtrail_streamer.processing.publisher import (
    BatchPublisher,
    PublishResult,
    fixed_partition_key,
    hashed_partition_key,
)
from cloudtrail_streamer.readers.reader import RecordReader
from cloudtrail_streamer.sources import ObjectStore, ObjectStoreFactory
from cloudtrail_streamer.streams import Stream, StreamFactory
from cloudtrail_streamer.utils.logger import logger


@dataclass
class StreamerContext:
    """
    Process-lifetime collaborators shared by every invocation.

    Everything here is built once, before the first event, and only read
    afterwards.
    """

    config: AppConfig
    stream: Stream
    object_store: ObjectStore
    filter_set: FilterSet
    reader: RecordReader = field(default_factory=RecordReader)
    publisher: BatchPublisher = field(init=False)
    dispatcher: EventDispatcher = field(init=False)
    envelope_dispatcher: EnvelopeDispatcher = field(init=False)

    def __post_init__(self) -> None:
        partition_key_fn = (
            hashed_partition_key
            if self.config.partition_key_mode == "hash"
            else fixed_partition_key
        )
        self.publisher = BatchPublisher(
            stream=self.stream,
            batch_size=self.config.batch_size,
            partition_key_fn=partition_key_fn,
        )
        self.dispatcher = EventDispatcher(
            object_store=self.object_store,
            reader=self.reader,
            publisher=self.publisher,
            filter_set=self.filter_set,
        )
        self.envelope_dispatcher = EnvelopeDispatcher(self.dispatcher)

    @classmethod
    def from_config(cls, config: AppConfig) -> "StreamerContext":
        """Build the Kinesis stream, S3 object store and filters for a config."""
        stream = StreamFactory.create(
            "kinesis",
            stream_name=config.kinesis_stream,
            region=config.kinesis_region,
            endpoint_url=config.kinesis_endpoint_url,
        )
        object_store = ObjectStoreFactory.create(
            "s3",
            role_arn=config.s3_role_arn,
            endpoint_url=config.s3_endpoint_url,
        )
        filter_set = FilterFactory.parse(config.event_filters)
        logger.debug(f"Running with filters: {filter_set}")

        return cls(
            config=config,
            stream=stream,
            object_store=object_store,
            filter_set=filter_set,
        )

    def handle(self, event: Dict[str, Any]) -> List[PublishResult]:
        """Route the event to the dispatcher matching the configured event type."""
        if self.config.event_type == "SNS":
            return self.envelope_dispatcher.handle(event)
        return self.dispatcher.handle(event)
