"""
Navigation stack state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

import httpx


class StackMutation(Enum):
    """Ways the routing engine may change the primary stack."""
    PUSH = "push"
    REPLACE_TOP = "replace_top"
    RESET = "reset"
    POP_AND_PUSH = "pop_and_push"
    COLLAPSE_AND_REPLACE = "collapse_and_replace"
    NONE = "none"


@dataclass
class NavigationStack:
    """
    Ordered screens of the primary navigation; the last entry is displayed.

    Entries are anything with a ``url`` attribute, in practice
    ``VisitableScreen`` instances. Once the first visit has been applied the
    stack is never empty.
    """

    entries: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __contains__(self, screen: Any) -> bool:
        return any(entry is screen for entry in self.entries)

    @property
    def top(self) -> Optional[Any]:
        return self.entries[-1] if self.entries else None

    @property
    def urls(self) -> List[httpx.URL]:
        return [entry.url for entry in self.entries]

    def apply(self, mutation: StackMutation, screen: Any) -> List[Any]:
        """
        Apply a mutation that installs ``screen`` as the new top.

        Args:
            mutation: The change chosen by the routing engine
            screen: The newly created screen

        Returns:
            Screens removed from the stack, bottom first
        """
        removed: List[Any] = []
        if mutation is StackMutation.NONE:
            return removed

        if mutation is StackMutation.PUSH:
            pass
        elif mutation in (StackMutation.REPLACE_TOP, StackMutation.POP_AND_PUSH):
            if self.entries:
                removed.append(self.entries.pop())
        elif mutation in (StackMutation.RESET, StackMutation.COLLAPSE_AND_REPLACE):
            # Collapsing to the bottom entry and then replacing it leaves the
            # same single entry as a reset; they differ only in intent.
            removed.extend(self.entries)
            self.entries.clear()
        else:
            raise ValueError(f"Unsupported stack mutation: {mutation}")

        self.entries.append(screen)
        return removed

    def pop(self) -> Optional[Any]:
        """Remove the top entry, refusing to empty the stack."""
        if len(self.entries) <= 1:
            return None
        return self.entries.pop()
