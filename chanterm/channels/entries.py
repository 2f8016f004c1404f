"""Ordered channel labels with a stable identity side index.

Labels are built once per session as ``"<slot> <kind-glyph> <name>"`` and are
only rewritten in place by overlays. Entries are never added, removed, or
reordered, so an index keeps naming the same channel for the whole session.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..service.types import CHANNEL_KIND_GROUP, CHANNEL_KIND_IM, Channel

ICON_ONLINE = "●"
ICON_OFFLINE = "○"
ICON_CHANNEL = "#"
ICON_GROUP = "☰"
ICON_NOTIFICATION = "1"
EMPTY_SLOT = " "


def kind_glyph(kind: str) -> str:
    """Return the leading glyph for a channel kind.

    Direct messages start hollow: presence is unknown until first queried.
    """
    if kind == CHANNEL_KIND_IM:
        return ICON_OFFLINE
    if kind == CHANNEL_KIND_GROUP:
        return ICON_GROUP
    return ICON_CHANNEL


def format_channel_label(channel: Channel, notification: bool = False) -> str:
    slot = ICON_NOTIFICATION if notification else EMPTY_SLOT
    return f"{slot} {kind_glyph(channel.kind)} {channel.name}"


class ChannelEntryStore:
    """Fixed-length label list mirroring the service channel order."""

    def __init__(self, channels: Sequence[Channel]) -> None:
        self._channels: tuple[Channel, ...] = tuple(channels)
        self._labels: list[str] = [format_channel_label(channel) for channel in self._channels]

    def __len__(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> tuple[str, ...]:
        """Read-only snapshot of the current labels."""
        return tuple(self._labels)

    def label_at(self, index: int) -> str:
        return self._labels[index]

    def set_label(self, index: int, label: str) -> None:
        self._labels[index] = label

    def channel_at(self, index: int) -> Channel:
        return self._channels[index]

    def identity_at(self, index: int) -> str:
        return self._channels[index].id

    def find_index(self, identity: str) -> int | None:
        """Return the index of the entry answering to ``identity``.

        Every entry answers to its channel id; direct-message entries also
        answer to their peer user id. Returns ``None`` when nothing matches.
        """
        for idx, channel in enumerate(self._channels):
            if channel.id == identity or (channel.user_id is not None and channel.user_id == identity):
                return idx
        return None
