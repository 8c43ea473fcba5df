from abc import ABC, abstractmethod
from typing import Dict, List, Union

# One PutRecords entry: {"Data": bytes, "PartitionKey": str}
StreamEntry = Dict[str, Union[bytes, str]]


class Stream(ABC):
    """
    Base abstract class for all stream implementations.

    This abstract class defines the interface that all stream implementations must
    adhere to. Stream implementations send one bounded batch of entries per call
    and never split or reorder it.
    """

    @abstractmethod
    def send(self, entries: List[StreamEntry]) -> None:
        """
        Send one batch of entries to the stream destination.

        Args:
            entries (List[StreamEntry]): The entries to send, in order.

        Raises:
            StreamError: If the service rejects the batch or any entry in it.
        """
        pass
