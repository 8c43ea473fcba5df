from dataclasses import dataclass
from typing import Callable, List, Optional
import hashlib
from cloudtrail_streamer.filters.base import FilterLike, Record
from cloudtrail_streamer.streams.base import Stream, StreamEntry
from cloudtrail_streamer.utils.serializer import Serializer
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.config.loader import MAX_BATCH_SIZE
from cloudtrail_streamer.utils.exceptions import (
    ConfigurationError,
    EncodeError,
    PublishError,
    StreamError,
)

DEFAULT_PARTITION_KEY = "key"

PartitionKeyFn = Callable[[Record, bytes], str]


def fixed_partition_key(record: Record, payload: bytes) -> str:
    """Every record lands on the same shard."""
    return DEFAULT_PARTITION_KEY


def hashed_partition_key(record: Record, payload: bytes) -> str:
    """Spread records across shards by the SHA-256 of their encoded form."""
    return hashlib.sha256(payload).hexdigest()


@dataclass
class PublishResult:
    """Counters describing one publish call."""

    published: int = 0
    filtered: int = 0
    skipped: int = 0
    batches: int = 0


class BatchPublisher:
    """
    Filters records and publishes the survivors to a stream in bounded batches.

    Records are encoded and appended in source order. A batch is flushed as
    soon as it holds ``batch_size`` entries, and whatever remains is flushed
    once the input is exhausted.
    """

    def __init__(
        self,
        stream: Stream,
        batch_size: int,
        serializer: Optional[Serializer] = None,
        partition_key_fn: Optional[PartitionKeyFn] = None,
    ) -> None:
        if batch_size <= 0 or batch_size > MAX_BATCH_SIZE:
            raise ConfigurationError(
                f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}"
            )
        self.stream = stream
        self.batch_size = batch_size
        self.serializer = serializer or Serializer()
        self.partition_key_fn = partition_key_fn or fixed_partition_key

    def publish(self, records: List[Record], filter_set: FilterLike) -> PublishResult:
        """
        Publish every record the filter set does not match.

        Args:
            records: The decoded records, in source order.
            filter_set: Records it matches are excluded.

        Returns:
            PublishResult: What was published, filtered out and skipped.

        Raises:
            PublishError: If the stream rejects a batch. Batches flushed before
                the failure stay published and later batches are not attempted.
        """
        result = PublishResult()
        batch: List[StreamEntry] = []

        for record in records:
            if filter_set.matches(record):
                result.filtered += 1
                continue

            logger.debug(f"Writing record to kinesis: {record}")
            try:
                payload = self.serializer.serialize(record)
            except EncodeError as e:
                logger.error(f"Error marshalling record to json, skipping it: {e}")
                result.skipped += 1
                continue

            batch.append(
                {"Data": payload, "PartitionKey": self.partition_key_fn(record, payload)}
            )

            if len(batch) >= self.batch_size:
                self._flush(batch, result)
                batch = []

        if batch:
            self._flush(batch, result)

        logger.info(
            f"Published {result.published} records in {result.batches} batches "
            f"({result.filtered} filtered, {result.skipped} skipped)"
        )
        return result

    def _flush(self, batch: List[StreamEntry], result: PublishResult) -> None:
        logger.debug(f"Flushing {len(batch)} records to stream")
        try:
            self.stream.send(batch)
        except StreamError as e:
            logger.error(f"Error pushing records to kinesis: {e}")
            raise PublishError(f"Failed to publish batch of {len(batch)} records: {e}", cause=e)

        result.published += len(batch)
        result.batches += 1
