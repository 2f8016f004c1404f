"""Service protocol consumed by the client runtime."""

from __future__ import annotations

from typing import Protocol

from .types import Channel, Message, ServiceEvent


class ChatService(Protocol):
    """Operations the runtime needs from a chat backend.

    Every method may raise ``ServiceError``; callers log and carry on.
    """

    self_name: str

    def channels(self) -> list[Channel]:
        """Return all channels in display order."""
        ...

    def presence(self, user_id: str) -> str:
        """Return ``"active"``, ``"away"``, or another backend-specific state."""
        ...

    def mark_read(self, channel_id: str) -> None:
        ...

    def history(self, channel_id: str, limit: int) -> list[Message]:
        """Return up to ``limit`` newest messages, oldest first."""
        ...

    def send_message(self, channel_id: str, text: str) -> Message:
        ...

    def poll_events(self) -> list[ServiceEvent]:
        """Return events that arrived since the previous poll."""
        ...
