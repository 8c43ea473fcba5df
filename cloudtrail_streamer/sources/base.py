from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ObjectReference:
    """Identifies one log file: the region, bucket and key it lives at."""

    region: str
    bucket: str
    key: str

    def __str__(self) -> str:
        return f"s3://{self.bucket}/{self.key} ({self.region})"


@dataclass(frozen=True)
class StoredObject:
    """Body and content metadata of a fetched object."""

    body: bytes
    content_type: Optional[str] = None
    content_encoding: Optional[str] = None


class ObjectStore(ABC):
    """
    Base abstract class for all object store implementations.

    Object stores are responsible for fetching log files referenced by
    storage notifications.
    """

    @abstractmethod
    def fetch(self, ref: ObjectReference) -> StoredObject:
        """
        Fetch one object.

        Args:
            ref (ObjectReference): The object to fetch.

        Returns:
            StoredObject: The object body and its content metadata.

        Raises:
            FetchError: If the object is missing, access is denied, or the read fails.
        """
        pass
