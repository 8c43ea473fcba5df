from typing import Any, Dict, Optional
import os
from threading import Lock
import boto3
import botocore
import packaging.version
from boto3.session import Session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from cloudtrail_streamer.sources.base import ObjectReference, ObjectStore, StoredObject
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import FetchError

ROLE_SESSION_NAME = "cloudtrail-streamer"
TCP_KEEPALIVE_MIN_BOTOCORE = "1.27.84"


class S3ObjectStore(ObjectStore):
    """
    AWS S3 implementation of the ObjectStore interface.

    One client is created per region on first use and reused for the rest of
    the process. When a role ARN is configured, the role is assumed once
    through STS and its temporary credentials back every S3 client.
    """

    def __init__(
        self,
        role_arn: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        session: Optional[Session] = None,
    ):
        """
        Initialize the S3 object store.

        Args:
            role_arn: Optional role to assume for S3 reads. Defaults to
                CT_S3_ROLE_ARN environment variable.
            endpoint_url: Optional S3 endpoint override. Defaults to
                CT_S3_ENDPOINT_URL environment variable.
            session: Optional boto3 session used to create clients.
        """
        self.role_arn = role_arn if role_arn is not None else os.getenv("CT_S3_ROLE_ARN", "")
        self.endpoint_url = endpoint_url or os.getenv("CT_S3_ENDPOINT_URL") or None
        self._session = session
        self._credentials: Optional[Dict[str, str]] = None
        self._clients: Dict[str, Any] = {}
        self._client_lock = Lock()

    def _get_session(self) -> Session:
        if self._session is None:
            self._session = boto3.session.Session()
        return self._session

    def _client_config(self) -> Config:
        config_params: Dict[str, Any] = {
            "connect_timeout": 3,
            "read_timeout": 10,
            "retries": {"max_attempts": 3},
        }

        if packaging.version.parse(botocore.__version__) >= packaging.version.parse(
            TCP_KEEPALIVE_MIN_BOTOCORE
        ):
            config_params["tcp_keepalive"] = True

        return Config(**config_params)

    def _assume_role(self) -> Dict[str, str]:
        """
        Assume the configured role and return its temporary credentials.

        Raises:
            FetchError: If STS refuses the role.
        """
        if self._credentials is None:
            sts = self._get_session().client("sts")
            try:
                response = sts.assume_role(
                    RoleArn=self.role_arn, RoleSessionName=ROLE_SESSION_NAME
                )
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Failed to assume role {self.role_arn}: {e}")
                raise FetchError(
                    f"Failed to assume role {self.role_arn}: {e}",
                    cause=e,
                    code=_error_code(e),
                )

            credentials = response["Credentials"]
            self._credentials = {
                "aws_access_key_id": credentials["AccessKeyId"],
                "aws_secret_access_key": credentials["SecretAccessKey"],
                "aws_session_token": credentials["SessionToken"],
            }
            logger.debug(f"Assumed role {self.role_arn} for S3 reads")

        return self._credentials

    def _get_client(self, region: str) -> Any:
        """
        Get or create the boto3 S3 client for a region.

        Returns:
            Any: The configured boto3 S3 client.
        """
        client = self._clients.get(region)
        if client is None:
            with self._client_lock:
                client = self._clients.get(region)
                if client is None:
                    credentials = self._assume_role() if self.role_arn else {}
                    client = self._get_session().client(
                        "s3",
                        region_name=region or None,
                        endpoint_url=self.endpoint_url,
                        config=self._client_config(),
                        **credentials,
                    )
                    self._clients[region] = client
                    logger.debug(
                        f"Setup S3 client: region={region} endpoint={self.endpoint_url} "
                        f"role={self.role_arn or '-'}"
                    )

        return client

    def fetch(self, ref: ObjectReference) -> StoredObject:
        client = self._get_client(ref.region)
        logger.debug(f"Reading {ref.key} from {ref.bucket}")

        try:
            response = client.get_object(Bucket=ref.bucket, Key=ref.key)
            body = response["Body"]
            try:
                data = body.read()
            finally:
                body.close()
        except ClientError as e:
            code = _error_code(e)
            logger.error(f"AWS Error reading {ref}: {code}: {e}")
            raise FetchError(f"Failed to fetch {ref}: {e}", cause=e, code=code)
        except BotoCoreError as e:
            logger.error(f"Error getting S3 object {ref}: {e}")
            raise FetchError(f"Failed to fetch {ref}: {e}", cause=e)

        return StoredObject(
            body=data,
            content_type=response.get("ContentType"),
            content_encoding=response.get("ContentEncoding"),
        )


def _error_code(error: Exception) -> Optional[str]:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None
