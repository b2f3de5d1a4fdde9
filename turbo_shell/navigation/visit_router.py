"""
Visit routing: decides how each visit changes the navigation stack.

``route`` is a pure function of the request, the stack, the modal flag and
the active screen's URL. The branches are evaluated in a fixed order and the
first one that applies wins:

1. a presented modal is dismissed, then evaluation continues
2. the root path with more than one entry collapses the stack and replaces
   its bottom entry
3. ``presentation: modal`` presents over the stack
4. ``action: replace`` replaces the top and forces a reload
5. revisiting the active URL replaces the top in place
6. otherwise the action decides: advance pushes, replace resets, restore
   pops and pushes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

from ..Constants import SESSION_MODAL, SESSION_PRIMARY
from ..state.navigation_state import StackMutation
from .path_rules import PropertyMap, Scalar, VisitAction, VisitProperties


class VisitTarget(str, Enum):
    """Which content session loads the new screen."""
    PRIMARY = SESSION_PRIMARY
    MODAL = SESSION_MODAL


class RouteBranch(Enum):
    ROOT = "root"
    MODAL = "modal"
    REPLACE_PROPERTY = "replace_property"
    REFRESH = "refresh"
    ADVANCE = "advance"
    REPLACE = "replace"
    RESTORE = "restore"


@dataclass(frozen=True)
class VisitRequest:
    """A proposal to visit ``url``. Consumed once by the router."""
    url: httpx.URL
    action: VisitAction = VisitAction.ADVANCE
    properties: Mapping[str, Scalar] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        url: Union[httpx.URL, str],
        action: Any = None,
        properties: Optional[PropertyMap] = None,
    ) -> "VisitRequest":
        return cls(
            url=httpx.URL(url) if isinstance(url, str) else url,
            action=VisitAction.normalize(action),
            properties=dict(properties or {}),
        )

    @property
    def visit_properties(self) -> VisitProperties:
        return VisitProperties.from_map(self.properties)


@dataclass(frozen=True)
class RouteDecision:
    """The single stack mutation and load instruction for one visit."""
    branch: RouteBranch
    mutation: StackMutation
    target: VisitTarget
    url: httpx.URL
    animated: bool
    dismiss_modal: bool = False
    reload: bool = False


_ACTION_BRANCHES = {
    VisitAction.ADVANCE: (RouteBranch.ADVANCE, StackMutation.PUSH, True),
    VisitAction.REPLACE: (RouteBranch.REPLACE, StackMutation.RESET, False),
    VisitAction.RESTORE: (RouteBranch.RESTORE, StackMutation.POP_AND_PUSH, True),
}


def route(
    request: VisitRequest,
    stack: Sequence[Any],
    modal_presented: bool = False,
    active_url: Optional[httpx.URL] = None,
) -> RouteDecision:
    """
    Decide how ``request`` changes the stack and which session loads it.

    Args:
        request: The visit being routed
        stack: Current primary stack (only its length is consulted)
        modal_presented: Whether a modal screen is showing
        active_url: URL of the primary session's active screen

    Returns:
        The decision; identical inputs always give identical decisions.
    """
    url = request.url
    properties = request.visit_properties
    dismiss_modal = modal_presented

    def decide(branch, mutation, target=VisitTarget.PRIMARY, animated=True, reload=False):
        return RouteDecision(
            branch=branch,
            mutation=mutation,
            target=target,
            url=url,
            animated=animated,
            dismiss_modal=dismiss_modal,
            reload=reload,
        )

    if url.path == "/" and len(stack) > 1:
        return decide(RouteBranch.ROOT, StackMutation.COLLAPSE_AND_REPLACE)

    if properties.is_modal:
        return decide(RouteBranch.MODAL, StackMutation.NONE, target=VisitTarget.MODAL)

    if properties.action is VisitAction.REPLACE:
        return decide(RouteBranch.REPLACE_PROPERTY, StackMutation.REPLACE_TOP, animated=False, reload=True)

    if active_url is not None and url == active_url:
        return decide(RouteBranch.REFRESH, StackMutation.REPLACE_TOP, animated=False)

    action = properties.action or request.action
    branch, mutation, animated = _ACTION_BRANCHES[action]
    return decide(branch, mutation, animated=animated)
