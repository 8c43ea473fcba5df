from typing import Any, Dict, List, Optional
import os
import boto3
import botocore
import packaging.version
from threading import Lock
from boto3.session import Session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from cloudtrail_streamer.streams.base import Stream, StreamEntry
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import ConfigurationError, StreamError


class Kinesis(Stream):
    """
    AWS Kinesis Data Streams implementation of the Stream interface.

    Each call to send issues exactly one PutRecords request. A response that
    reports failed entries is treated as a failure of the whole batch.
    """

    # Kinesis has a hard limit of 500 records per PutRecords request
    KINESIS_MAX_BATCH_SIZE = 500
    TCP_KEEPALIVE_MIN_BOTOCORE = "1.27.84"

    def __init__(
        self,
        stream_name: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        session: Optional[Session] = None,
    ):
        """
        Initialize the Kinesis stream with configuration.

        Args:
            stream_name: The name of the Kinesis stream. Defaults to
                CT_KINESIS_STREAM environment variable.
            region: The AWS region of the stream. Defaults to
                CT_KINESIS_REGION environment variable.
            endpoint_url: Optional endpoint override. Defaults to
                CT_KINESIS_ENDPOINT_URL environment variable.
            session: Optional boto3 session used to create the client.

        Raises:
            ConfigurationError: If any required configuration parameter is missing.
        """
        self.stream_name = stream_name or os.getenv("CT_KINESIS_STREAM")
        if not self.stream_name:
            raise ConfigurationError("CT_KINESIS_STREAM is required")

        self.region = region or os.getenv("CT_KINESIS_REGION")
        if not self.region:
            raise ConfigurationError("CT_KINESIS_REGION is required")

        self.endpoint_url = endpoint_url or os.getenv("CT_KINESIS_ENDPOINT_URL") or None

        self._client = None
        self._client_lock = Lock()
        self._session = session

    def _create_session(self) -> Session:
        if self._session is None:
            self._session = boto3.session.Session(region_name=self.region)
        return self._session

    def _get_client(self) -> Any:
        """
        Get or create the boto3 Kinesis client.

        Returns:
            Any: The configured boto3 Kinesis client.
        """
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    session = self._create_session()

                    config_params: Dict[str, Any] = {
                        "connect_timeout": 3,
                        "read_timeout": 5,
                        "retries": {"max_attempts": 3},
                    }
                    if packaging.version.parse(
                        botocore.__version__
                    ) >= packaging.version.parse(self.TCP_KEEPALIVE_MIN_BOTOCORE):
                        config_params["tcp_keepalive"] = True

                    self._client = session.client(
                        "kinesis",
                        region_name=self.region,
                        endpoint_url=self.endpoint_url,
                        config=Config(**config_params),
                    )

                    logger.debug(
                        f"Setup Kinesis client: {self.stream_name} - {self.endpoint_url} "
                        f"- {self.region}"
                    )

        return self._client

    def send(self, entries: List[StreamEntry]) -> None:
        """
        Send one batch of entries with a single PutRecords request.

        Args:
            entries: The entries to send, each holding ``Data`` and ``PartitionKey``.

        Raises:
            StreamError: If the batch is too large, the request fails, or any
                entry is reported as failed.
        """
        if not entries:
            return

        if len(entries) > self.KINESIS_MAX_BATCH_SIZE:
            raise StreamError(
                f"Batch of {len(entries)} records exceeds the Kinesis limit of "
                f"{self.KINESIS_MAX_BATCH_SIZE}"
            )

        client = self._get_client()

        try:
            response = client.put_records(StreamName=self.stream_name, Records=entries)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            logger.error(f"Kinesis put_records failed: {code}: {e}")
            raise StreamError(
                f"Failed to put records to Kinesis: {e}", cause=e, code=code
            )
        except BotoCoreError as e:
            logger.error(f"Kinesis put_records failed: {e}")
            raise StreamError(f"Failed to put records to Kinesis: {e}", cause=e)

        failed_count = response.get("FailedRecordCount", 0)
        if failed_count:
            failed = [
                result
                for result in response.get("Records", [])
                if result.get("ErrorCode")
            ]
            for result in failed:
                logger.error(
                    f"Record failed: {result.get('ErrorCode')}: "
                    f"{result.get('ErrorMessage', 'Unknown error')}"
                )

            code = failed[0].get("ErrorCode") if failed else None
            error_msg = (
                f"Failed to put {failed_count} of {len(entries)} records to "
                f"Kinesis stream {self.stream_name}"
            )
            logger.error(error_msg)
            raise StreamError(error_msg, code=code)

        logger.debug(f"Successfully put {len(entries)} records to Kinesis")
