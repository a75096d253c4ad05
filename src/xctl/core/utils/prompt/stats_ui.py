"""Traffic counter UI components."""

import time

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from xctl.core.utils.prompt.prompt import PromptHandler
from xctl.core.utils.utils import format_bytes


class StatsUI(PromptHandler):
    """UI handler for counters returned by QueryStats."""

    def __init__(self, target: str, human: bool = False) -> None:
        """Initialize the stats UI handler.

        Args:
            target: ``address:port`` of the control API, shown in the title
            human: Render values as byte sizes instead of raw integers
        """
        super().__init__()
        self.target = target
        self.human = human

    def _format_value(self, value: int) -> str:
        return format_bytes(value) if self.human else str(value)

    def generate_table(self, stats: dict[str, int]) -> Table:
        """Generate the counters table."""
        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Value", style="green", no_wrap=True, justify="right")

        for name, value in sorted(stats.items()):
            table.add_row(name, self._format_value(value))

        table.add_row("Total Counters", str(len(stats)), style="bold")
        return table

    def generate_display(self, stats: dict[str, int]) -> Panel:
        """Generate the main display panel."""
        title = Text(f"Xray Stats @ {self.target}", style="bold cyan")
        subtitle = Text(time.strftime("%H:%M:%S"), style="dim")
        return Panel(
            self.generate_table(stats),
            title=title,
            subtitle=subtitle,
            border_style="blue",
            padding=(1, 2),
        )
