"""Back-navigation history for the selection wizard."""

from __future__ import annotations

from typing import Optional


class NavigationHistory:
    """Stack of the step names the user has answered, oldest first.

    Only prompted steps are recorded; skipped and pre-answered steps never
    appear, so going back always lands on a step the user actually saw.
    """

    def __init__(self) -> None:
        self._stack: list[str] = []

    def record(self, step_name: str) -> None:
        self._stack.append(step_name)

    def go_back(self) -> Optional[str]:
        """Pop and return the most recent step name, or ``None`` if empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def can_go_back(self) -> bool:
        return bool(self._stack)

    def reset(self) -> None:
        self._stack.clear()

    def depth(self) -> int:
        return len(self._stack)

    @property
    def steps(self) -> list[str]:
        """A copy of the recorded step names."""
        return list(self._stack)

    def __repr__(self) -> str:
        return f"NavigationHistory({self._stack!r})"
