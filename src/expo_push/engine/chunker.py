"""
Chunker - splits requests into groups that fit the API limits.

Push messages are weighted by recipient count; receipt ids weigh one slot each.
"""

from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TypeVar

import structlog

from expo_push.config import (
    PUSH_NOTIFICATION_CHUNK_LIMIT,
    PUSH_NOTIFICATION_RECEIPT_CHUNK_LIMIT,
)
from expo_push.core.message import PushMessage

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def chunk_list(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """
    Split a sequence into consecutive lists of at most `size` items.

    Args:
        items: Items to split
        size: Maximum number of items per list

    Yields:
        Lists of items in input order
    """
    if size < 1:
        raise ValueError("Chunk size must be at least 1")

    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def chunk_by_weight(
    items: Iterable[T],
    limit: int,
    weight: Callable[[T], int],
    split: Optional[Callable[[T, int], Iterable[T]]] = None,
) -> Iterator[List[T]]:
    """
    Group weighted items so that no group exceeds the limit.

    Items keep their input order. Zero-weight items are dropped. An item
    heavier than the limit is replaced by the fragments `split` produces,
    each emitted as its own group after the running group is flushed.

    Args:
        items: Items to group
        limit: Maximum total weight per group
        weight: Function returning an item's weight
        split: Function splitting an oversized item into fragments that fit

    Yields:
        Groups of items
    """
    if limit < 1:
        raise ValueError("Chunk limit must be at least 1")

    current: List[T] = []
    current_weight = 0

    for item in items:
        item_weight = weight(item)

        if item_weight == 0:
            continue

        if item_weight > limit:
            if split is None:
                raise ValueError(
                    f"Item weight {item_weight} exceeds chunk limit {limit}"
                )

            if current:
                yield current
                current = []
                current_weight = 0

            for fragment in split(item, limit):
                yield [fragment]
            continue

        if current_weight + item_weight > limit:
            yield current
            current = []
            current_weight = 0

        current.append(item)
        current_weight += item_weight

    if current:
        yield current


def split_message(message: PushMessage, limit: int) -> Iterator[PushMessage]:
    """
    Split a message into copies with at most `limit` recipients each.

    Every copy carries the original's non-recipient fields.
    """
    logger.debug(
        "splitting_message",
        recipients=message.slot_count,
        limit=limit,
    )
    for recipients in chunk_list(message.to, limit):
        yield message.with_recipients(recipients)


def chunk_push_notifications(
    messages: Iterable[PushMessage],
    limit: int = PUSH_NOTIFICATION_CHUNK_LIMIT,
) -> Iterator[List[PushMessage]]:
    """
    Group messages into chunks of at most `limit` recipient slots.

    Messages without recipients are skipped.
    """
    return chunk_by_weight(
        messages,
        limit,
        weight=lambda message: message.slot_count,
        split=split_message,
    )


def chunk_receipt_ids(
    receipt_ids: Iterable[str],
    limit: int = PUSH_NOTIFICATION_RECEIPT_CHUNK_LIMIT,
) -> Iterator[List[str]]:
    """Group receipt ids into chunks of at most `limit` ids."""
    return chunk_list(list(receipt_ids), limit)


def count_slots(messages: Iterable[PushMessage]) -> int:
    """Total recipient slots across messages, i.e. the expected ticket count."""
    return sum(message.slot_count for message in messages)
