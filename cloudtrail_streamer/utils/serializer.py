from typing import Any, Dict
import json
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import EncodeError


class Serializer:
    """
    Encodes decoded log records back into the bytes published on the stream.

    Output is canonical compact JSON: keys sorted, no whitespace between tokens,
    UTF-8 encoded. Encoding the same record twice always yields the same bytes.
    """

    def serialize(self, record: Dict[str, Any]) -> bytes:
        """
        Serialize a single record to its canonical JSON byte form.

        Args:
            record (Dict[str, Any]): The record to encode.

        Returns:
            bytes: The UTF-8 encoded JSON document.

        Raises:
            EncodeError: If the record holds values that have no JSON form.
        """
        try:
            return json.dumps(
                record,
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.debug(f"Serialization exception: {e}")
            raise EncodeError(f"Failed to encode record: {e}", cause=e)
