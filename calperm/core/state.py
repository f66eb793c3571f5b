"""
Operation state tracking.

Describes the workflow currently in progress (action, target mailbox, the
user whose access is being changed, and the current step). Every screen
reads it to draw the status bar, and the window title is derived from it.
"""

from dataclasses import dataclass, fields, replace
from typing import Callable, Optional


@dataclass
class OperationState:
    """Display context of the in-progress operation."""
    action: Optional[str] = None
    target_mailbox: Optional[str] = None
    acting_user: Optional[str] = None
    step: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


class OperationStateTracker:
    """
    Owner of the OperationState for one app run.

    set() merges: only the fields passed overwrite, others keep their value.
    The title and status line are computed from the current state on every
    read, so they can never go stale.
    """

    FIELD_NAMES = tuple(f.name for f in fields(OperationState))

    def __init__(self, app_name: str, on_change: Optional[Callable[[str], None]] = None):
        self.app_name = app_name
        self.on_change = on_change
        self._state = OperationState()

    @property
    def state(self) -> OperationState:
        """A copy of the current state."""
        return replace(self._state)

    def set(self, **changes) -> OperationState:
        """Merge the given fields into the state."""
        unknown = set(changes) - set(self.FIELD_NAMES)
        if unknown:
            raise TypeError(f"Unknown operation state field(s): {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(self._state, name, value)
        self._notify()
        return self.state

    def reset(self) -> None:
        """Clear every field."""
        self._state = OperationState()
        self._notify()

    @property
    def title(self) -> str:
        """Window title: "<App> | <Action> | Target: <T> | User: <U> | <Step>"."""
        s = self._state
        parts = [self.app_name]
        if s.action:
            parts.append(s.action)
        if s.target_mailbox:
            parts.append(f"Target: {s.target_mailbox}")
        if s.acting_user:
            parts.append(f"User: {s.acting_user}")
        if s.step:
            parts.append(s.step)
        return " | ".join(parts)

    def status_items(self) -> list[tuple[str, str]]:
        """Non-empty (label, value) pairs for the status bar."""
        s = self._state
        items = [
            ("Action", s.action),
            ("Target", s.target_mailbox),
            ("User", s.acting_user),
            ("Step", s.step),
        ]
        return [(label, value) for label, value in items if value]

    @property
    def status_line(self) -> str:
        """Plain status bar text, empty when nothing is in progress."""
        return "  •  ".join(f"{label}: {value}" for label, value in self.status_items())

    def _notify(self):
        if self.on_change:
            self.on_change(self.title)
