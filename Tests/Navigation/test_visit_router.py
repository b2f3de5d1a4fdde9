"""
Tests for visit routing: branch order and the resulting stack mutations.
"""

import httpx
import pytest

from turbo_shell.navigation.path_rules import VisitAction
from turbo_shell.navigation.visit_router import (
    RouteBranch,
    VisitRequest,
    VisitTarget,
    route,
)
from turbo_shell.state.navigation_state import NavigationStack, StackMutation

from Tests.turbo_test_utilities import BASE_URL, FakeScreen


def url(path):
    return httpx.URL(BASE_URL + path)


def stack_of(*paths):
    return NavigationStack([FakeScreen(url(path)) for path in paths])


def visit(stack, path, action=None, properties=None, modal_presented=False):
    """Route a request and apply it the way the shell does."""
    request = VisitRequest.create(url(path), action, properties)
    active = stack.top.url if stack.top is not None else None
    decision = route(request, stack, modal_presented=modal_presented, active_url=active)
    screen = FakeScreen(decision.url)
    stack.apply(decision.mutation, screen)
    return decision, screen


class TestScenarios:

    def test_advance_pushes_with_animation(self):
        stack = stack_of("/a")
        decision, screen = visit(stack, "/b", "advance")

        assert decision.branch is RouteBranch.ADVANCE
        assert decision.mutation is StackMutation.PUSH
        assert decision.target is VisitTarget.PRIMARY
        assert decision.animated
        assert [str(u) for u in stack.urls] == [BASE_URL + "/a", BASE_URL + "/b"]
        assert stack.top is screen

    def test_root_path_collapses_to_a_single_home_entry(self):
        stack = stack_of("/a", "/b")
        decision, screen = visit(stack, "/", "advance")

        assert decision.branch is RouteBranch.ROOT
        assert decision.mutation is StackMutation.COLLAPSE_AND_REPLACE
        assert decision.target is VisitTarget.PRIMARY
        assert stack.entries == [screen]
        assert screen.url == url("/")

    def test_modal_presentation_leaves_primary_stack_alone(self):
        stack = stack_of("/a")
        top = stack.top
        decision, _ = visit(stack, "/c", "advance", {"presentation": "modal"})

        assert decision.branch is RouteBranch.MODAL
        assert decision.mutation is StackMutation.NONE
        assert decision.target is VisitTarget.MODAL
        assert len(stack) == 1
        assert stack.top is top


class TestBranchOrder:

    def test_presented_modal_is_dismissed_before_anything_else(self):
        decision, _ = visit(stack_of("/a"), "/b", modal_presented=True)
        assert decision.dismiss_modal
        assert decision.branch is RouteBranch.ADVANCE

    def test_no_dismissal_without_a_modal(self):
        decision, _ = visit(stack_of("/a"), "/b")
        assert not decision.dismiss_modal

    def test_root_wins_over_modal_property(self):
        decision, _ = visit(stack_of("/a", "/b"), "/", properties={"presentation": "modal"})
        assert decision.branch is RouteBranch.ROOT

    def test_root_with_a_single_entry_falls_through(self):
        decision, _ = visit(stack_of("/a"), "/", "advance")
        assert decision.branch is RouteBranch.ADVANCE

    def test_modal_wins_over_replace_property(self):
        decision, _ = visit(stack_of("/a"), "/c", properties={"presentation": "modal", "action": "replace"})
        assert decision.branch is RouteBranch.MODAL

    def test_replace_property_replaces_top_and_reloads(self):
        stack = stack_of("/a", "/b")
        decision, screen = visit(stack, "/c", "advance", {"action": "replace"})

        assert decision.branch is RouteBranch.REPLACE_PROPERTY
        assert decision.mutation is StackMutation.REPLACE_TOP
        assert decision.reload
        assert [str(u) for u in stack.urls] == [BASE_URL + "/a", BASE_URL + "/c"]

    def test_replace_property_wins_over_same_url(self):
        decision, _ = visit(stack_of("/a"), "/a", properties={"action": "replace"})
        assert decision.branch is RouteBranch.REPLACE_PROPERTY

    def test_restore_property_overrides_the_request_action(self):
        stack = stack_of("/a", "/b")
        decision, _ = visit(stack, "/c", "advance", {"action": "restore"})
        assert decision.branch is RouteBranch.RESTORE
        assert [str(u) for u in stack.urls] == [BASE_URL + "/a", BASE_URL + "/c"]


class TestSameUrlRefresh:

    def test_refresh_replaces_top_in_place_without_animation(self):
        stack = stack_of("/a", "/b")
        old_top = stack.top
        decision, screen = visit(stack, "/b", "advance")

        assert decision.branch is RouteBranch.REFRESH
        assert decision.mutation is StackMutation.REPLACE_TOP
        assert not decision.animated
        assert not decision.reload
        assert len(stack) == 2
        assert stack.top is screen
        assert stack.top is not old_top

    def test_query_string_makes_a_different_url(self):
        decision, _ = visit(stack_of("/a"), "/a?page=2")
        assert decision.branch is RouteBranch.ADVANCE


class TestActions:

    def test_replace_action_resets_the_stack(self):
        stack = stack_of("/a", "/b", "/c")
        decision, screen = visit(stack, "/d", "replace")

        assert decision.branch is RouteBranch.REPLACE
        assert decision.mutation is StackMutation.RESET
        assert stack.entries == [screen]

    def test_restore_action_pops_then_pushes(self):
        stack = stack_of("/a", "/b")
        decision, _ = visit(stack, "/c", "restore")

        assert decision.mutation is StackMutation.POP_AND_PUSH
        assert [str(u) for u in stack.urls] == [BASE_URL + "/a", BASE_URL + "/c"]

    @pytest.mark.parametrize("action", [None, "", "jump"])
    def test_unknown_action_is_advance(self, action):
        decision, _ = visit(stack_of("/a"), "/b", action)
        assert decision.branch is RouteBranch.ADVANCE

    def test_first_visit_on_empty_stack(self):
        stack = NavigationStack()
        decision, screen = visit(stack, "/", "replace")
        assert decision.branch is RouteBranch.REPLACE
        assert stack.entries == [screen]


class TestProperties:

    @pytest.mark.parametrize("depth", [2, 3, 5])
    def test_root_always_leaves_exactly_one_entry(self, depth):
        stack = stack_of(*[f"/p{i}" for i in range(depth)])
        visit(stack, "/", "advance")
        assert len(stack) == 1
        assert stack.top.url == url("/")

    def test_routing_is_deterministic(self):
        request = VisitRequest.create(url("/b"), "restore", {"context": "x"})
        first = route(request, [object(), object()], modal_presented=True, active_url=url("/a"))
        second = route(request, [object(), object()], modal_presented=True, active_url=url("/a"))
        assert first == second

    def test_request_normalizes_its_action(self):
        request = VisitRequest.create(BASE_URL + "/b", "RePlAcE")
        assert request.action is VisitAction.REPLACE
        assert request.url == url("/b")
