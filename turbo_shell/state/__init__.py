"""
State management module for the turbo shell.
"""

from .app_state import ShellState
from .navigation_state import NavigationStack, StackMutation

__all__ = [
    'ShellState',
    'NavigationStack',
    'StackMutation',
]
