from typing import Any, Dict, List, Optional
import json
from cloudtrail_streamer.processing.dispatcher import EventDispatcher
from cloudtrail_streamer.processing.publisher import PublishResult
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import DecodeError


class EnvelopeUnwrapper:
    """Extracts the S3 event notification carried in an SNS record."""

    def unwrap(self, envelope: Dict[str, Any]) -> Dict[str, Any]:
        """
        Decode the message body of one SNS record.

        S3 test notifications carry no ``Records`` and unwrap to an event with
        nothing to process.

        Raises:
            DecodeError: If the message is absent, not JSON, or not a JSON object.
        """
        try:
            message = envelope["Sns"]["Message"]
        except (KeyError, TypeError) as e:
            raise DecodeError(f"SNS record has no message: {e}", cause=e)

        try:
            event = json.loads(message)
        except (TypeError, ValueError) as e:
            logger.error(f"Error decoding SNS message: {e}")
            raise DecodeError(f"SNS message is not valid JSON: {e}", cause=e)

        if not isinstance(event, dict):
            raise DecodeError(
                f"SNS message is a {type(event).__name__}, expected an S3 event object"
            )

        if event.get("Event") == "s3:TestEvent":
            logger.info("Ignoring S3 test event")
            return {"Records": []}

        return event


class EnvelopeDispatcher:
    """Unwraps each SNS record and hands the S3 event to an EventDispatcher."""

    def __init__(
        self,
        dispatcher: EventDispatcher,
        unwrapper: Optional[EnvelopeUnwrapper] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.unwrapper = unwrapper or EnvelopeUnwrapper()

    def handle(self, sns_event: Dict[str, Any]) -> List[PublishResult]:
        logger.debug(f"Handling SNS event: {sns_event}")
        results = []
        for envelope in sns_event.get("Records") or []:
            s3_event = self.unwrapper.unwrap(envelope)
            results.extend(self.dispatcher.handle(s3_event))
        return results
