from dataclasses import dataclass
from typing import Optional
import os
from cloudtrail_streamer.utils.logger import debug_enabled, logger
from cloudtrail_streamer.utils.exceptions import ConfigurationError

MAX_BATCH_SIZE = 500
EVENT_TYPES = ("S3", "SNS")
PARTITION_KEY_MODES = ("fixed", "hash")


@dataclass(frozen=True)
class AppConfig(object):
    """
    Application-wide configuration.

    This class represents the configuration for one Lambda process: the
    destination Kinesis stream, the batch size used for PutRecords calls,
    the optional role assumed for S3 reads, the expected event shape and the
    raw event filter rules.
    """

    kinesis_stream: str
    kinesis_region: str
    batch_size: int = MAX_BATCH_SIZE
    s3_role_arn: str = ""
    event_type: str = "S3"
    event_filters: str = ""
    debug_logging: bool = False
    partition_key_mode: str = "fixed"
    kinesis_endpoint_url: Optional[str] = None
    s3_endpoint_url: Optional[str] = None

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug_logging else "INFO"

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Create an AppConfig instance from environment variables.

        Returns:
            AppConfig: Configured instance with values from environment variables
                      or defaults if the optional variables are not set.

        Raises:
            ConfigurationError: If a required variable is missing or a value is
                invalid.
        """
        kinesis_stream = os.getenv("CT_KINESIS_STREAM", "")
        if not kinesis_stream:
            raise ConfigurationError("CT_KINESIS_STREAM must be set")

        kinesis_region = os.getenv("CT_KINESIS_REGION", "")
        if not kinesis_region:
            raise ConfigurationError("CT_KINESIS_REGION must be set")

        batch_size = parse_batch_size(os.getenv("CT_KINESIS_BATCH_SIZE", ""))

        event_type = os.getenv("CT_EVENT_TYPE", "") or "S3"
        if event_type not in EVENT_TYPES:
            raise ConfigurationError(
                f"CT_EVENT_TYPE is set to an invalid value, {event_type}, "
                "must be either 'S3' or 'SNS'"
            )

        partition_key_mode = (os.getenv("CT_PARTITION_KEY_MODE", "") or "fixed").lower()
        if partition_key_mode not in PARTITION_KEY_MODES:
            raise ConfigurationError(
                f"CT_PARTITION_KEY_MODE is set to an invalid value, "
                f"{partition_key_mode}, must be either 'fixed' or 'hash'"
            )

        debug_logging = debug_enabled()

        config = cls(
            kinesis_stream=kinesis_stream,
            kinesis_region=kinesis_region,
            batch_size=batch_size,
            s3_role_arn=os.getenv("CT_S3_ROLE_ARN", ""),
            event_type=event_type,
            event_filters=os.getenv("CT_EVENT_FILTERS", ""),
            debug_logging=debug_logging,
            partition_key_mode=partition_key_mode,
            kinesis_endpoint_url=os.getenv("CT_KINESIS_ENDPOINT_URL") or None,
            s3_endpoint_url=os.getenv("CT_S3_ENDPOINT_URL") or None,
        )

        logger.info(
            f"Config: stream={config.kinesis_stream}, region={config.kinesis_region}, "
            f"batch_size={config.batch_size}, event_type={config.event_type}, "
            f"role_arn={config.s3_role_arn or '-'}, "
            f"partition_key_mode={config.partition_key_mode}"
        )

        return config


def parse_batch_size(value: str) -> int:
    """
    Parse the CT_KINESIS_BATCH_SIZE setting.

    An empty value selects the Kinesis PutRecords maximum of 500.
    """
    if not value:
        return MAX_BATCH_SIZE

    try:
        batch_size = int(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Error converting CT_KINESIS_BATCH_SIZE ({value}) to int: {e}", cause=e
        )

    if batch_size <= 0 or batch_size > MAX_BATCH_SIZE:
        raise ConfigurationError(
            f"CT_KINESIS_BATCH_SIZE must be set to a value between 1 and {MAX_BATCH_SIZE}"
        )

    return batch_size
