"""Local workspace-file chat backend.

A workspace is one JSON document describing the signed-in user, the ordered
channel list, last known presence, and message history. Live activity comes
from a JSON-lines event feed next to it, tailed by byte offset on every poll.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path

from .types import (
    CHANNEL_KIND_IM,
    CHANNEL_KINDS,
    Channel,
    Message,
    MessageEvent,
    PresenceEvent,
    ServiceError,
    ServiceEvent,
)

logger = logging.getLogger(__name__)

EVENTS_SUFFIX = ".events.jsonl"


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def default_events_path(workspace_path: Path) -> Path:
    """Return the event feed path paired with ``workspace_path``."""
    return workspace_path.with_name(workspace_path.name + EVENTS_SUFFIX)


def _parse_message(raw: object) -> Message | None:
    if not isinstance(raw, dict):
        return None
    text = raw.get("text")
    user = raw.get("user")
    if not isinstance(text, str) or not isinstance(user, str):
        return None
    ts = raw.get("ts")
    if isinstance(ts, bool) or not isinstance(ts, (int, float)):
        ts = time.time()
    return Message(ts=float(ts), user=user, text=text)


def _parse_channel(raw: object) -> Channel | None:
    if not isinstance(raw, dict):
        return None
    channel_id = raw.get("id")
    name = raw.get("name")
    kind = raw.get("kind", "channel")
    if not isinstance(channel_id, str) or not channel_id:
        return None
    if not isinstance(name, str) or not name:
        return None
    if kind not in CHANNEL_KINDS:
        return None
    user_id = raw.get("user_id")
    if kind == CHANNEL_KIND_IM:
        if not isinstance(user_id, str) or not user_id:
            return None
    else:
        user_id = None
    return Channel(id=channel_id, kind=kind, name=name, user_id=user_id)


def parse_event(raw: object) -> ServiceEvent | None:
    """Decode one event-feed object, returning ``None`` for unknown shapes."""
    if not isinstance(raw, dict):
        return None
    event_type = raw.get("type")
    if event_type == "message":
        channel_id = raw.get("channel")
        message = _parse_message(raw)
        if not isinstance(channel_id, str) or message is None:
            return None
        return MessageEvent(channel_id=channel_id, message=message)
    if event_type == "presence":
        user_id = raw.get("user")
        presence = raw.get("presence")
        if not isinstance(user_id, str) or not isinstance(presence, str):
            return None
        return PresenceEvent(user_id=user_id, presence=presence)
    return None


class WorkspaceChatService:
    """Chat service backed by a workspace JSON file and an event feed."""

    def __init__(self, workspace_path: Path, events_path: Path | None = None) -> None:
        """Load ``workspace_path`` eagerly; raise ``ServiceError`` if unusable."""
        self.workspace_path = workspace_path
        self.events_path = events_path if events_path is not None else default_events_path(workspace_path)
        self._lock = threading.Lock()
        self._read_marks: dict[str, float] = {}

        try:
            data = json.loads(read_text(workspace_path))
        except OSError as exc:
            raise ServiceError(f"cannot read workspace {workspace_path}: {exc}") from exc
        except ValueError as exc:
            raise ServiceError(f"malformed workspace {workspace_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ServiceError(f"malformed workspace {workspace_path}: expected a JSON object")

        me = data.get("self")
        name = me.get("name") if isinstance(me, dict) else None
        self.self_name = name if isinstance(name, str) and name else "me"

        self._channels: list[Channel] = []
        seen: set[str] = set()
        raw_channels = data.get("channels")
        for raw in raw_channels if isinstance(raw_channels, list) else []:
            channel = _parse_channel(raw)
            if channel is None or channel.id in seen:
                logger.warning("skipping invalid channel entry: %r", raw)
                continue
            seen.add(channel.id)
            self._channels.append(channel)

        raw_presence = data.get("presence")
        self._presence: dict[str, str] = {
            str(user_id): state
            for user_id, state in (raw_presence.items() if isinstance(raw_presence, dict) else [])
            if isinstance(state, str)
        }

        self._history: dict[str, list[Message]] = {channel.id: [] for channel in self._channels}
        raw_messages = data.get("messages")
        if isinstance(raw_messages, dict):
            for channel_id, raw_list in raw_messages.items():
                if channel_id not in self._history or not isinstance(raw_list, list):
                    continue
                parsed = [message for message in map(_parse_message, raw_list) if message is not None]
                self._history[channel_id] = sorted(parsed, key=lambda message: message.ts)

        self._events_offset = self._events_size()
        logger.info(
            "loaded workspace %s: %d channels, events from %s",
            workspace_path,
            len(self._channels),
            self.events_path,
        )

    def _events_size(self) -> int:
        try:
            return self.events_path.stat().st_size
        except OSError:
            return 0

    def channels(self) -> list[Channel]:
        return list(self._channels)

    def presence(self, user_id: str) -> str:
        with self._lock:
            state = self._presence.get(user_id)
        if state is None:
            raise ServiceError(f"no presence known for {user_id}")
        return state

    def mark_read(self, channel_id: str) -> None:
        """Record the newest message timestamp of ``channel_id`` as read."""
        with self._lock:
            history = self._history.get(channel_id)
            if history is None:
                raise ServiceError(f"unknown channel {channel_id}")
            self._read_marks[channel_id] = history[-1].ts if history else 0.0

    def history(self, channel_id: str, limit: int) -> list[Message]:
        with self._lock:
            history = self._history.get(channel_id)
            if history is None:
                raise ServiceError(f"unknown channel {channel_id}")
            if limit <= 0:
                return []
            return list(history[-limit:])

    def send_message(self, channel_id: str, text: str) -> Message:
        message = Message(ts=time.time(), user=self.self_name, text=text)
        with self._lock:
            history = self._history.get(channel_id)
            if history is None:
                raise ServiceError(f"unknown channel {channel_id}")
            history.append(message)
        return message

    def poll_events(self) -> list[ServiceEvent]:
        """Read complete new lines from the event feed and decode them.

        A feed that shrank since the previous poll is treated as rotated and
        read again from the start.
        """
        size = self._events_size()
        if size < self._events_offset:
            logger.info("event feed %s shrank; rereading from start", self.events_path)
            self._events_offset = 0
        if size == self._events_offset:
            return []

        try:
            with self.events_path.open("rb") as handle:
                handle.seek(self._events_offset)
                chunk = handle.read(size - self._events_offset)
        except OSError as exc:
            raise ServiceError(f"cannot read event feed {self.events_path}: {exc}") from exc

        complete_end = chunk.rfind(b"\n") + 1
        if complete_end == 0:
            return []
        self._events_offset += complete_end

        events: list[ServiceEvent] = []
        for raw_line in chunk[:complete_end].splitlines():
            line = raw_line.decode("utf-8", errors="replace").strip()
            if not line:
                continue
            try:
                event = parse_event(json.loads(line))
            except ValueError:
                event = None
            if event is None:
                logger.warning("skipping malformed event line: %s", line[:200])
                continue
            self._apply_event(event)
            events.append(event)
        return events

    def _apply_event(self, event: ServiceEvent) -> None:
        with self._lock:
            if isinstance(event, MessageEvent):
                history = self._history.get(event.channel_id)
                if history is not None:
                    history.append(event.message)
            else:
                self._presence[event.user_id] = event.presence
