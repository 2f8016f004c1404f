"""Value types exchanged with the chat service backend.

Channels, messages, and the two asynchronous event kinds the client reacts to.
All types are frozen so they can cross the event-pump thread boundary safely.
"""

from __future__ import annotations

from dataclasses import dataclass

CHANNEL_KIND_CHANNEL = "channel"
CHANNEL_KIND_GROUP = "group"
CHANNEL_KIND_IM = "im"
CHANNEL_KINDS = (CHANNEL_KIND_CHANNEL, CHANNEL_KIND_GROUP, CHANNEL_KIND_IM)

PRESENCE_ACTIVE = "active"
PRESENCE_AWAY = "away"


class ServiceError(Exception):
    """Raised by service backends for any collaborator-side failure."""


@dataclass(frozen=True)
class Channel:
    """One conversation as enumerated by the service.

    ``user_id`` is only set for direct-message (``im``) channels and names the
    peer whose presence the entry displays.
    """

    id: str
    kind: str
    name: str
    user_id: str | None = None

    @property
    def is_im(self) -> bool:
        return self.kind == CHANNEL_KIND_IM


@dataclass(frozen=True)
class Message:
    ts: float
    user: str
    text: str


@dataclass(frozen=True)
class MessageEvent:
    """A new message arrived in ``channel_id``."""

    channel_id: str
    message: Message


@dataclass(frozen=True)
class PresenceEvent:
    """Presence of ``user_id`` changed to ``presence``."""

    user_id: str
    presence: str


ServiceEvent = MessageEvent | PresenceEvent
