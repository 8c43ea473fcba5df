from typing import Any, List, Optional
import gzip
import json
import zlib
from cloudtrail_streamer.filters.base import Record
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import DecodeError

GZIP_MAGIC = b"\x1f\x8b"
GZIP_CONTENT_TYPES = ("application/x-gzip", "application/gzip")
GZIP_CONTENT_ENCODING = "gzip"
RECORDS_KEY = "Records"


class RecordReader:
    """
    Decodes CloudTrail log files into a list of records.

    Decompression is always attempted: the body is gunzipped when it starts
    with the gzip magic number and read as plain JSON otherwise. Content type
    and content encoding metadata are only used for diagnostics, since S3
    objects written by CloudTrail do not reliably carry them.
    """

    def read(
        self,
        body: bytes,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
    ) -> List[Record]:
        """
        Decode a log file body into its records.

        Args:
            body: The raw object bytes.
            content_type: The object's Content-Type metadata, if any.
            content_encoding: The object's Content-Encoding metadata, if any.

        Returns:
            List[Record]: The records in file order. Empty when the document
                has no usable ``Records`` array.

        Raises:
            DecodeError: If the compressed stream or the JSON document is malformed.
        """
        data = self._decompress(body, content_type, content_encoding)
        return self._decode(data)

    def _decompress(
        self,
        body: bytes,
        content_type: Optional[str],
        content_encoding: Optional[str],
    ) -> bytes:
        hinted = (
            (content_type or "").lower() in GZIP_CONTENT_TYPES
            or (content_encoding or "").lower() == GZIP_CONTENT_ENCODING
        )
        compressed = body[:2] == GZIP_MAGIC

        if hinted and not compressed:
            logger.debug(
                f"Object metadata claims gzip (type={content_type}, "
                f"encoding={content_encoding}) but body is not gzip, reading as raw JSON"
            )
        elif compressed and not hinted:
            logger.debug(f"Detected gzip body without gzip metadata (type={content_type})")

        if not compressed:
            return body

        try:
            return gzip.decompress(body)
        except (OSError, EOFError, zlib.error) as e:
            logger.error(f"Error unzipping cloudtrail json file: {e}")
            raise DecodeError(f"Malformed gzip stream: {e}", cause=e)

    def _decode(self, data: bytes) -> List[Record]:
        try:
            document: Any = json.loads(data)
        except (UnicodeDecodeError, ValueError) as e:
            logger.error(f"Error decoding cloudtrail json file: {e}")
            raise DecodeError(f"Malformed JSON document: {e}", cause=e)

        if not isinstance(document, dict):
            logger.error(f"Unexpected log file shape: {type(document).__name__}")
            raise DecodeError(
                f"Expected a JSON object at the top level, got {type(document).__name__}"
            )

        records = document.get(RECORDS_KEY)
        if not isinstance(records, list):
            logger.debug(f"No {RECORDS_KEY} array in log file, nothing to read")
            return []

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise DecodeError(
                    f"{RECORDS_KEY}[{index}] is a {type(record).__name__}, expected an object"
                )

        logger.debug(f"Decoded {len(records)} records")
        return records
