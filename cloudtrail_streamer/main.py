import json
import sys
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from cloudtrail_streamer.utils.logger import Logger, logger
from cloudtrail_streamer.config.loader import AppConfig
from cloudtrail_streamer.context import StreamerContext
from cloudtrail_streamer.utils.exceptions import StreamerError

_context: Optional[StreamerContext] = None


def get_context() -> StreamerContext:
    """
    Return the process-wide StreamerContext, building it on first use.

    Configuration errors raised here are fatal: the Lambda runtime reports the
    failed initialization and no event is processed.
    """
    global _context
    if _context is None:
        load_dotenv()
        app_config = AppConfig.load()
        if app_config.debug_logging:
            Logger.update_level(app_config.log_level)
        _context = StreamerContext.from_config(app_config)
    return _context


def error_fields(error: StreamerError) -> Dict[str, Any]:
    """Structured log fields describing a failed invocation."""
    fields: Dict[str, Any] = {"error_kind": error.kind}
    code = getattr(error, "code", None) or getattr(error.cause, "code", None)
    if code:
        fields["error_code"] = code
    if error.cause is not None:
        fields["cause"] = type(error.cause).__name__
    return fields


def handler(event: Dict[str, Any], context: Any = None) -> None:
    """
    Lambda entry point.

    Streams every log file referenced by the event. Any exception propagates
    so that the Lambda runtime retries the invocation.
    """
    logger.debug(f"Received context: {context}")
    try:
        results = get_context().handle(event)
    except StreamerError as e:
        logger.error(f"Invocation failed: {e}", extra={"fields": error_fields(e)})
        raise
    except Exception as e:
        logger.exception(f"Invocation failed unexpectedly: {e}")
        raise

    published = sum(result.published for result in results)
    logger.info(f"Processed {len(results)} log files, published {published} records")


def main() -> None:
    """
    Run the handler locally against an event read from a file or stdin.

    Usage: ``cloudtrail-streamer event.json``
    """
    if len(sys.argv) > 1:
        with open(sys.argv[1]) as f:
            event = json.load(f)
    else:
        event = json.load(sys.stdin)

    handler(event)


if __name__ == "__main__":
    main()
