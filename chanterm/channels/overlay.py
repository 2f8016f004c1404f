"""Label overlays for unread notifications and direct-message presence.

Each operation rewrites at most one label and is idempotent. Event-driven
overlays resolve their target by identity through the entry store, never by a
caller-supplied position.
"""

from __future__ import annotations

from collections.abc import Callable

from ..service.types import CHANNEL_KIND_IM, PRESENCE_ACTIVE
from .entries import EMPTY_SLOT, ICON_NOTIFICATION, ICON_OFFLINE, ICON_ONLINE, ChannelEntryStore

_NOTIFICATION_PREFIX = ICON_NOTIFICATION + " "
GLYPH_COLUMN = len(_NOTIFICATION_PREFIX)


def label_has_notification(label: str) -> bool:
    return label.startswith(_NOTIFICATION_PREFIX)


def with_notification(label: str) -> str:
    if label_has_notification(label):
        return label
    return ICON_NOTIFICATION + label[len(EMPTY_SLOT):]


def without_notification(label: str) -> str:
    if not label_has_notification(label):
        return label
    return EMPTY_SLOT + label[len(ICON_NOTIFICATION):]


def with_presence(label: str, presence: str) -> str:
    """Set the presence glyph; ``active`` fills it, anything else hollows it.

    Only the glyph column is touched, so a name containing a glyph is kept.
    """
    if len(label) <= GLYPH_COLUMN or label[GLYPH_COLUMN] not in (ICON_ONLINE, ICON_OFFLINE):
        return label
    glyph = ICON_ONLINE if presence == PRESENCE_ACTIVE else ICON_OFFLINE
    return label[:GLYPH_COLUMN] + glyph + label[GLYPH_COLUMN + 1:]


class ChannelOverlays:
    """Apply notification and presence overlays onto an entry store."""

    def __init__(self, store: ChannelEntryStore, alert: Callable[[], None] | None = None) -> None:
        self.store = store
        self._alert = alert

    def set_notification(self, identity: str) -> bool:
        """Mark ``identity`` as having unread messages.

        Returns ``True`` when the entry exists. The alert fires only when the
        marker was newly added.
        """
        index = self.store.find_index(identity)
        if index is None:
            return False
        label = self.store.label_at(index)
        if label_has_notification(label):
            return True
        self.store.set_label(index, with_notification(label))
        if self._alert is not None:
            self._alert()
        return True

    def clear_notification(self, index: int) -> None:
        if not 0 <= index < len(self.store):
            return
        label = self.store.label_at(index)
        cleared = without_notification(label)
        if cleared != label:
            self.store.set_label(index, cleared)

    def set_presence(self, identity: str, presence: str) -> bool:
        """Show ``presence`` on the direct-message entry for ``identity``.

        Non-DM entries and unknown identities are left untouched.
        """
        index = self.store.find_index(identity)
        if index is None:
            return False
        if self.store.channel_at(index).kind != CHANNEL_KIND_IM:
            return False
        self.store.set_label(index, with_presence(self.store.label_at(index), presence))
        return True
