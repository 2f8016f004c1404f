"""Chat service protocol, value types, and the workspace-file backend."""

from .base import ChatService
from .types import (
    CHANNEL_KIND_CHANNEL,
    CHANNEL_KIND_GROUP,
    CHANNEL_KIND_IM,
    PRESENCE_ACTIVE,
    PRESENCE_AWAY,
    Channel,
    Message,
    MessageEvent,
    PresenceEvent,
    ServiceError,
    ServiceEvent,
)
from .workspace import WorkspaceChatService, default_events_path

__all__ = [
    "CHANNEL_KIND_CHANNEL",
    "CHANNEL_KIND_GROUP",
    "CHANNEL_KIND_IM",
    "PRESENCE_ACTIVE",
    "PRESENCE_AWAY",
    "Channel",
    "ChatService",
    "Message",
    "MessageEvent",
    "PresenceEvent",
    "ServiceError",
    "ServiceEvent",
    "WorkspaceChatService",
    "default_events_path",
]
