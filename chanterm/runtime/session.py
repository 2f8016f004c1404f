"""Client session operations bound to one service and one ``AppState``.

Everything here runs on the main loop thread. Service failures are logged and
shown as a transient status message; they never change sidebar state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..layout import ScreenLayout
from ..service.base import ChatService
from ..service.types import MessageEvent, PresenceEvent, ServiceError, ServiceEvent
from .state import AppState

logger = logging.getLogger(__name__)

CHANNEL_SWITCH_DELAY_SECONDS = 0.25
STATUS_MESSAGE_SECONDS = 3.0
HISTORY_LIMIT = 200


class ClientSession:
    """Glue between key actions, service calls, and the channel viewport."""

    def __init__(
        self,
        service: ChatService,
        state: AppState,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.service = service
        self.state = state
        self._clock = clock

    def set_status(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def expire_status(self, now: float) -> None:
        state = self.state
        if state.status_message and now >= state.status_message_until:
            state.status_message = ""
            state.status_message_until = 0.0
            state.dirty = True

    def _report(self, action: str, exc: ServiceError) -> None:
        logger.warning("%s failed: %s", action, exc)
        self.set_status(f"{action} failed: {exc}")

    def load_presence(self) -> None:
        """Query presence for every direct-message entry.

        A failed query leaves that entry's icon as it is.
        """
        store = self.state.viewport.store
        for index in range(len(store)):
            channel = store.channel_at(index)
            if not channel.is_im or channel.user_id is None:
                continue
            try:
                presence = self.service.presence(channel.user_id)
            except ServiceError as exc:
                logger.info("presence for %s unavailable: %s", channel.user_id, exc)
                continue
            self.state.viewport.overlays.set_presence(channel.user_id, presence)
        self.state.dirty = True

    def apply_layout(self, layout: ScreenLayout) -> None:
        if layout == self.state.layout:
            return
        self.state.layout = layout
        self.state.viewport.set_window(layout.list_window_top, layout.list_window_bottom)
        self.state.dirty = True

    def schedule_channel_switch(self) -> None:
        """Switch the chat pane once the selection settles."""
        self.state.channel_switch_due = self._clock() + CHANNEL_SWITCH_DELAY_SECONDS

    def maybe_switch_channel(self, now: float) -> bool:
        due = self.state.channel_switch_due
        if due is None or now < due:
            return False
        self.switch_channel_now()
        return True

    def switch_channel_now(self) -> None:
        """Load history for the selected channel and mark it read."""
        state = self.state
        state.channel_switch_due = None
        viewport = state.viewport
        identity = viewport.selected_identity()
        if identity is None or identity == state.chat.channel_id:
            return
        channel = viewport.store.channel_at(viewport.selected_index)
        try:
            messages = self.service.history(identity, HISTORY_LIMIT)
        except ServiceError as exc:
            self._report("loading history", exc)
            messages = []
        state.chat.load(identity, channel.name, messages)
        self.mark_selected_read()
        state.dirty = True

    def mark_selected_read(self) -> None:
        identity = self.state.viewport.selected_identity()
        if identity is None:
            return
        try:
            self.service.mark_read(identity)
        except ServiceError as exc:
            self._report("mark read", exc)

    def send_message(self, text: str) -> None:
        channel_id = self.state.chat.channel_id
        if channel_id is None:
            return
        try:
            message = self.service.send_message(channel_id, text)
        except ServiceError as exc:
            self._report("sending message", exc)
            return
        self.state.chat.append(message)
        self.state.chat.scroll = 0
        self.state.dirty = True

    def apply_event(self, event: ServiceEvent) -> None:
        """Apply one service event to the chat pane or sidebar overlays."""
        state = self.state
        if isinstance(event, MessageEvent):
            if event.channel_id == state.chat.channel_id:
                state.chat.append(event.message)
                try:
                    self.service.mark_read(event.channel_id)
                except ServiceError as exc:
                    logger.warning("mark read failed: %s", exc)
            elif not state.viewport.overlays.set_notification(event.channel_id):
                logger.debug("message for unknown channel %s", event.channel_id)
        elif isinstance(event, PresenceEvent):
            if not state.viewport.overlays.set_presence(event.user_id, event.presence):
                logger.debug("presence for unlisted user %s", event.user_id)
        state.dirty = True
