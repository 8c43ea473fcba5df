from typing import Any, Dict, Iterator, List
from urllib.parse import unquote_plus
from cloudtrail_streamer.filters.base import FilterLike
from cloudtrail_streamer.processing.publisher import BatchPublisher, PublishResult
from cloudtrail_streamer.readers.reader import RecordReader
from cloudtrail_streamer.sources.base import ObjectReference, ObjectStore
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import DecodeError


def object_references(event: Dict[str, Any]) -> Iterator[ObjectReference]:
    """
    Yield the object references carried by an S3 event notification, in order.

    Object keys are URL-decoded the way S3 notifications encode them.

    Raises:
        DecodeError: When iteration reaches a record lacking its bucket name or
            object key. References before it have already been yielded.
    """
    for index, record in enumerate(event.get("Records") or []):
        try:
            s3 = record["s3"]
            bucket = s3["bucket"]["name"]
            key = s3["object"]["key"]
        except (KeyError, TypeError) as e:
            raise DecodeError(
                f"Notification record {index} is missing the bucket or object key: {e}",
                cause=e,
            )
        yield ObjectReference(
            region=record.get("awsRegion", ""),
            bucket=bucket,
            key=unquote_plus(key),
        )


class EventDispatcher:
    """
    Streams every log file referenced by an S3 event notification.

    References are processed one at a time: fetch, decode, filter and publish.
    The first failure stops the event and propagates to the caller.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        reader: RecordReader,
        publisher: BatchPublisher,
        filter_set: FilterLike,
    ) -> None:
        self.object_store = object_store
        self.reader = reader
        self.publisher = publisher
        self.filter_set = filter_set

    def handle(self, event: Dict[str, Any]) -> List[PublishResult]:
        """
        Handle one S3 event notification.

        Args:
            event: The S3 event notification.

        Returns:
            List[PublishResult]: One result per referenced object.

        Raises:
            FetchError, DecodeError, PublishError: From the first failing object.
        """
        logger.debug(f"Handling S3 event: {event}")
        results = []
        for ref in object_references(event):
            results.append(self.stream_object(ref))
        return results

    def stream_object(self, ref: ObjectReference) -> PublishResult:
        logger.info(f"Streaming {ref}")
        stored = self.object_store.fetch(ref)
        records = self.reader.read(
            stored.body, stored.content_type, stored.content_encoding
        )
        return self.publisher.publish(records, self.filter_set)
