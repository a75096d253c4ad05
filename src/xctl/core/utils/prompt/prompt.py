"""Base prompt handling and UI components."""

from rich.console import Console
from rich.live import Live

console = Console()


class PromptHandler:
    """Base class for handling terminal output."""

    def __init__(self) -> None:
        """Initialize the PromptHandler with the default refresh rate."""
        self._refresh_per_second = 2

    def create_live_display(self, content, refresh_per_second: float | None = None):
        """Create a live updating display."""
        return Live(
            content,
            console=console,
            refresh_per_second=refresh_per_second or self._refresh_per_second,
            transient=True,
        )
