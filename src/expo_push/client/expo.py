"""
Expo push client.

Coordinates chunking, dispatch and request execution for batch operations.
"""

import asyncio
from typing import Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, TypeVar

import httpx
import structlog

from expo_push.client.interface import PushClientInterface
from expo_push.config import (
    PUSH_NOTIFICATION_CHUNK_LIMIT,
    PUSH_NOTIFICATION_RECEIPT_CHUNK_LIMIT,
    ClientConfig,
    get_config,
)
from expo_push.core.message import PushMessage
from expo_push.core.ticket import PushReceipt, PushTicket
from expo_push.core.token import is_expo_push_token
from expo_push.engine.chunker import chunk_push_notifications, chunk_receipt_ids
from expo_push.engine.dispatcher import RetryingDispatcher
from expo_push.exceptions import RequestTimeoutError
from expo_push.transport.executor import RequestExecutor

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ExpoClient(PushClientInterface):
    """
    Client for the Expo push notification service.

    Coordinates the client components:
    - Chunking messages and receipt ids to the per-request limits
    - Bounding concurrent requests and retrying rate-limited ones
    - Executing requests and decoding tickets and receipts

    Safe for concurrent use by several tasks; the concurrency limit is shared
    by every call made through one instance.

    Usage:
        ```python
        async with ExpoClient(ClientConfig(access_token="...")) as expo:
            messages = [PushMessage.create("ExponentPushToken[xxx]", body="Hello")]
            tickets = await expo.send_push_notifications(messages)
        ```
    """

    push_notification_chunk_limit = PUSH_NOTIFICATION_CHUNK_LIMIT
    push_notification_receipt_chunk_limit = PUSH_NOTIFICATION_RECEIPT_CHUNK_LIMIT

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        dispatcher: Optional[RetryingDispatcher] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration. Uses global config if not provided.
            http_client: Externally owned HTTP client (created and owned here if not provided)
            dispatcher: Custom dispatcher (created from config if not provided)
        """
        self.config = config or get_config()

        if http_client is not None:
            self._http_client = http_client
            self._owns_http_client = False
        else:
            self._http_client = httpx.AsyncClient(timeout=self.config.attempt_timeout)
            self._owns_http_client = True

        self._executor = RequestExecutor(self._http_client, self.config)
        self._dispatcher = dispatcher or RetryingDispatcher(self.config)
        self._closed = False

    async def __aenter__(self) -> "ExpoClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release resources; closes the HTTP client only if it was created here."""
        if self._closed:
            return
        self._closed = True

        if self._owns_http_client:
            await self._http_client.aclose()
        logger.info("expo_client_closed", owned_http_client=self._owns_http_client)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @staticmethod
    def is_expo_push_token(token: Optional[str]) -> bool:
        """Check whether a string looks like an Expo push token."""
        return is_expo_push_token(token)

    # Batch operations

    async def send_push_notifications(
        self,
        messages: Iterable[PushMessage],
    ) -> List[PushTicket]:
        """
        Send push notifications in as many requests as the limits require.

        Chunks are sent one after another. If a chunk fails, the error is
        raised and tickets from earlier chunks are discarded; use
        chunk_push_notifications with send_push_notifications_chunk to
        handle chunks individually.

        Args:
            messages: Messages to send

        Returns:
            One ticket per recipient, in input order
        """
        message_list = list(messages)
        if not message_list:
            return []

        tickets: List[PushTicket] = []
        for chunk in self.chunk_push_notifications(message_list):
            tickets.extend(await self.send_push_notifications_chunk(chunk))

        logger.info(
            "push_notifications_sent",
            messages=len(message_list),
            tickets=len(tickets),
        )
        return tickets

    async def get_push_notification_receipts(
        self,
        receipt_ids: Iterable[str],
    ) -> Dict[str, PushReceipt]:
        """
        Retrieve receipts in as many requests as the limits require.

        Args:
            receipt_ids: Ticket ids to look up

        Returns:
            Receipts keyed by id
        """
        id_list = list(receipt_ids)
        if not id_list:
            return {}

        receipts: Dict[str, PushReceipt] = {}
        for chunk in self.chunk_push_notification_receipt_ids(id_list):
            receipts.update(await self.get_push_notification_receipts_chunk(chunk))

        logger.info(
            "push_receipts_fetched",
            requested=len(id_list),
            received=len(receipts),
        )
        return receipts

    # Per-chunk operations

    async def send_push_notifications_chunk(
        self,
        chunk: Sequence[PushMessage],
    ) -> List[PushTicket]:
        """
        Send a single chunk of messages, retrying if rate limited.

        The chunk must fit within push_notification_chunk_limit slots.
        """
        return await self._dispatch(lambda: self._executor.send_messages(chunk))

    async def get_push_notification_receipts_chunk(
        self,
        receipt_ids: Sequence[str],
    ) -> Dict[str, PushReceipt]:
        """
        Retrieve receipts for a single chunk of ids, retrying if rate limited.

        The chunk must fit within push_notification_receipt_chunk_limit ids.
        """
        return await self._dispatch(lambda: self._executor.fetch_receipts(receipt_ids))

    async def _dispatch(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Dispatch one chunk request bounded by the total request timeout."""
        if self._closed:
            raise RuntimeError("ExpoClient is closed")

        timeout = self.config.total_request_timeout
        try:
            return await asyncio.wait_for(
                self._dispatcher.dispatch(operation),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("expo_total_timeout", timeout_seconds=timeout)
            raise RequestTimeoutError(
                f"Expo request did not complete within {timeout} seconds"
            ) from e

    # Chunking

    def chunk_push_notifications(
        self,
        messages: Iterable[PushMessage],
    ) -> Iterator[List[PushMessage]]:
        """Split messages into chunks of at most 100 recipient slots."""
        return chunk_push_notifications(messages, self.push_notification_chunk_limit)

    def chunk_push_notification_receipt_ids(
        self,
        receipt_ids: Iterable[str],
    ) -> Iterator[List[str]]:
        """Split receipt ids into chunks of at most 300 ids."""
        return chunk_receipt_ids(receipt_ids, self.push_notification_receipt_chunk_limit)
