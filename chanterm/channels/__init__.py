"""Channel sidebar model: entry labels, overlays, and viewport navigation.

``build_channel_viewport`` wires the three pieces together for one session.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..service.types import Channel
from .entries import (
    EMPTY_SLOT,
    ICON_CHANNEL,
    ICON_GROUP,
    ICON_NOTIFICATION,
    ICON_OFFLINE,
    ICON_ONLINE,
    ChannelEntryStore,
    format_channel_label,
)
from .overlay import ChannelOverlays, label_has_notification
from .viewport import ChannelViewport, VisibleEntry


def build_channel_viewport(
    channels: Sequence[Channel],
    *,
    window_top: int = 0,
    window_bottom: int = 0,
    alert: Callable[[], None] | None = None,
) -> ChannelViewport:
    """Build labels for ``channels`` and return a viewport at the first entry."""
    store = ChannelEntryStore(channels)
    return ChannelViewport(
        store,
        ChannelOverlays(store, alert=alert),
        window_top=window_top,
        window_bottom=window_bottom,
    )


__all__ = [
    "EMPTY_SLOT",
    "ICON_CHANNEL",
    "ICON_GROUP",
    "ICON_NOTIFICATION",
    "ICON_OFFLINE",
    "ICON_ONLINE",
    "ChannelEntryStore",
    "ChannelOverlays",
    "ChannelViewport",
    "VisibleEntry",
    "build_channel_viewport",
    "format_channel_label",
    "label_has_notification",
]
