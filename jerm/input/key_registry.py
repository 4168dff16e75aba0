"""Key-token to action table used by the normal-mode handler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..session import Mode, Session


@dataclass(frozen=True)
class KeyComboBinding:
    """Every token in ``combos`` runs ``handler``, which returns the next mode."""

    combos: tuple[str, ...]
    handler: Callable[[Session], Mode]


class KeyComboRegistry:
    """Bindings built once and shared by every session.

    Handlers receive the session at dispatch time, so the table itself holds
    no per-session state.
    """

    def __init__(self) -> None:
        self._actions: dict[str, Callable[[Session], Mode]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Bind each combo; a later binding for the same token wins."""
        for combo in binding.combos:
            self._actions[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register several bindings in order and return ``self`` for chaining."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str, session: Session) -> Mode | None:
        """Run the action bound to ``key``; ``None`` means the key is unbound."""
        action = self._actions.get(key)
        if action is None:
            return None
        return action(session)


__all__ = ["KeyComboBinding", "KeyComboRegistry"]
