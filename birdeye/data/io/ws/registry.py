"""Category to channel-list registry.

Architecture:
    The registry owns the mapping and never hands it out. Callers register and
    unregister channels; the dispatcher asks for a snapshot (an immutable
    tuple) and delivers outside the lock, so a slow delivery never blocks
    registration.

Design Decisions:
    - Broadcast semantics: every channel under a category gets every event
    - Insertion order preserved per category
    - One mutex for mutations and snapshots; snapshots are O(n) copies so
      readers never hold the lock across an await
"""

from __future__ import annotations

import logging
import threading

from ...core import WsDataType
from .channel import Channel

logger = logging.getLogger(__name__)


class SubscriptionRegistry:
    """Registry of output channels per data category."""

    def __init__(self, channel_capacity: int = 100) -> None:
        self._channel_capacity = channel_capacity
        self._channels: dict[WsDataType, list[Channel]] = {}
        self._lock = threading.Lock()

    def new_channel(self, category: WsDataType | str, maxsize: int | None = None) -> Channel:
        """Create and register a channel for ``category``.

        Raises:
            ValueError: ``category`` is a control tag (WELCOME/ERROR) or unknown.
        """
        category = WsDataType(category)
        if category.is_control:
            raise ValueError(f"{category.value} messages are never delivered to channels")
        channel = Channel(category, maxsize=maxsize or self._channel_capacity)
        with self._lock:
            self._channels.setdefault(category, []).append(channel)
        logger.debug(f"Registered channel for {category.value}")
        return channel

    def remove_channel(self, channel: Channel) -> bool:
        """Unregister and close ``channel``. Returns False if it was not registered."""
        with self._lock:
            channels = self._channels.get(channel.category, [])
            for i, registered in enumerate(channels):
                if registered is channel:
                    del channels[i]
                    break
            else:
                return False
            if not channels:
                self._channels.pop(channel.category, None)
        channel.close()
        logger.debug(f"Removed channel for {channel.category.value}")
        return True

    def snapshot(self, category: WsDataType) -> tuple[Channel, ...]:
        """Channels registered for ``category``, in registration order."""
        with self._lock:
            return tuple(self._channels.get(category, ()))

    def categories(self) -> list[WsDataType]:
        with self._lock:
            return list(self._channels)

    def close_all(self) -> None:
        """Close and forget every registered channel."""
        with self._lock:
            channels = [ch for chs in self._channels.values() for ch in chs]
            self._channels.clear()
        for channel in channels:
            channel.close()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(chs) for chs in self._channels.values())
