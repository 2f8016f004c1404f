"""Key-token to action dispatch table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyAction = Callable[[], "bool | None"]


@dataclass(frozen=True)
class KeyComboBinding:
    """Every token in ``combos`` triggers ``handler``."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    def __init__(self) -> None:
        self._actions: dict[str, KeyAction] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Add ``bindings``; a token bound twice keeps the later handler."""
        self._actions.update(
            (combo, binding.handler) for binding in bindings for combo in binding.combos
        )
        return self

    def dispatch(self, key: str) -> bool | None:
        """Run the action bound to ``key``. Unbound keys return ``None``."""
        action = self._actions.get(key)
        return None if action is None else action()
