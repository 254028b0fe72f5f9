"""Dispatcher: routes command/query messages to their handlers.

Transports build a message from :mod:`bucketctl.services.messages` and
call :meth:`Dispatcher.send`; they never pick a handler themselves.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from bucketctl.services.buckets import BucketService
from bucketctl.services.items import ItemService
from bucketctl.services.messages import (
    AddBucket,
    AddItem,
    GetBucket,
    GetBuckets,
    GetItem,
    GetItems,
    Message,
    RemoveBucket,
    RemoveItem,
    UpdateBucket,
    UpdateItem,
)

if TYPE_CHECKING:
    from bucketctl.domain.repository import BucketRepository
    from bucketctl.services.result import ServiceResult

Handler = Callable[[Any], Awaitable["ServiceResult"]]


class Dispatcher:
    """One handler per message type, bound to a shared repository."""

    def __init__(self, repository: BucketRepository) -> None:
        buckets = BucketService(repository)
        items = ItemService(repository)
        self._handlers: dict[type[Message], Handler] = {
            AddBucket: buckets.add_bucket,
            GetBuckets: buckets.get_buckets,
            GetBucket: buckets.get_bucket,
            UpdateBucket: buckets.update_bucket,
            RemoveBucket: buckets.remove_bucket,
            AddItem: items.add_item,
            GetItems: items.get_items,
            GetItem: items.get_item,
            UpdateItem: items.update_item,
            RemoveItem: items.remove_item,
        }

    def handler_for(self, message_type: type[Message]) -> Handler:
        try:
            return self._handlers[message_type]
        except KeyError:
            raise TypeError(f"No handler registered for {message_type.__name__}") from None

    async def send(self, message: Message) -> ServiceResult:
        """Dispatch *message* to its handler and return the handler's result."""
        return await self.handler_for(type(message))(message)
