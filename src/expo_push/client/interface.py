"""
Abstract interface for push notification clients.

Defines the operations application code depends on, so that tests and
alternative transports can substitute their own implementation.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List

from expo_push.core.message import PushMessage
from expo_push.core.ticket import PushReceipt, PushTicket


class PushClientInterface(ABC):
    """
    Abstract interface for sending push notifications.

    This interface defines the operations of a push client:
    - Sending messages and collecting tickets
    - Retrieving receipts for tickets
    - Chunking requests to the service limits
    """

    @abstractmethod
    async def send_push_notifications(
        self,
        messages: Iterable[PushMessage],
    ) -> List[PushTicket]:
        """
        Send push notifications.

        Args:
            messages: Messages to send; chunked automatically

        Returns:
            One ticket per recipient, in input order

        Raises:
            ApiError: If a chunk is rejected by the API
        """
        pass

    @abstractmethod
    async def get_push_notification_receipts(
        self,
        receipt_ids: Iterable[str],
    ) -> Dict[str, PushReceipt]:
        """
        Retrieve receipts for previously issued tickets.

        Args:
            receipt_ids: Ticket ids to look up; chunked automatically

        Returns:
            Receipts keyed by id
        """
        pass

    @abstractmethod
    def chunk_push_notifications(
        self,
        messages: Iterable[PushMessage],
    ) -> Iterator[List[PushMessage]]:
        """
        Split messages into chunks that each fit in one request.

        Args:
            messages: Messages to split

        Returns:
            Lazy sequence of message chunks
        """
        pass

    @abstractmethod
    def chunk_push_notification_receipt_ids(
        self,
        receipt_ids: Iterable[str],
    ) -> Iterator[List[str]]:
        """
        Split receipt ids into chunks that each fit in one request.

        Args:
            receipt_ids: Ids to split

        Returns:
            Lazy sequence of id chunks
        """
        pass
