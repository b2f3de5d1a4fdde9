# turbo_shell/Widgets/error_view.py
# Full-screen notice shown in place of a screen's content when its visit fails
#
# Imports
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.widget import Widget
from textual.widgets import Static
#
# Local Imports
from ..session.errors import ErrorPresentation


class ErrorView(Widget):
    """Icon, title and message for a failed visit."""

    DEFAULT_CSS = """
    ErrorView {
        width: 100%;
        height: 100%;
        align: center middle;
    }

    ErrorView .error-view-content {
        width: 60;
        height: auto;
    }

    ErrorView .error-view-icon {
        width: 100%;
        text-align: center;
        color: $accent;
        margin-bottom: 1;
    }

    ErrorView .error-view-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    ErrorView .error-view-message {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(self, presentation: ErrorPresentation, **kwargs):
        super().__init__(**kwargs)
        self.presentation = presentation

    def compose(self) -> ComposeResult:
        with Center():
            with Vertical(classes="error-view-content"):
                yield Static(self.presentation.icon, classes="error-view-icon")
                yield Static(self.presentation.title, classes="error-view-title", markup=False)
                yield Static(self.presentation.message, classes="error-view-message", markup=False)
