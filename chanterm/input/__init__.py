"""Input-layer public API for key decoding and mode handlers.

Exports are split between low-level terminal decoding (`read_key`) and the
mode handlers used by the runtime loop.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import (
    KeyContext,
    handle_command_key,
    handle_insert_key,
    handle_key,
    handle_search_key,
    parse_mouse_token,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyContext",
    "handle_command_key",
    "handle_insert_key",
    "handle_key",
    "handle_search_key",
    "parse_mouse_token",
    "read_key",
]
