"""Screens that show backend pages."""

from .visitable_screen import ModalVisitableScreen, VisitableScreen

__all__ = [
    'VisitableScreen',
    'ModalVisitableScreen',
]
