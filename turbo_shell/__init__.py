"""
turbo_shell - A Textual shell for server-driven Turbo screens

Renders HTML screens fetched from a Turbo-enabled backend inside a managed
navigation stack. Every visit is routed through a decision engine that combines
the visit's action hint, remotely configured path properties and the current
shape of the stack.
"""

__version__ = "0.1.0"
__license__ = "AGPLv3+"

__all__ = [
    "__version__",
    "__license__",
]
