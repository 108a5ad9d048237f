"""
Console banners for the setup tool
Header, success and failure banners plus the verbose step summary
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.models.run_config import RunConfig
from src.models.setup_report import SetupReport, StepStatus
from src.models.target import Target

PRODUCT_NAME = "ShopSmart"

_STATUS_STYLES = {
    StepStatus.COMPLETED: ("✓", "green"),
    StepStatus.SKIPPED: ("-", "yellow"),
    StepStatus.FAILED: ("✗", "red"),
    StepStatus.IN_PROGRESS: ("…", "yellow"),
    StepStatus.PENDING: (" ", "dim"),
}


class SetupBranding:
    """Renders the banners that frame a setup run.

    Messages are built as ``Text`` so bracketed tags such as ``[ERROR]`` are
    printed literally rather than parsed as rich markup.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def print_header(self, run_config: RunConfig) -> None:
        body = Text()
        body.append(f"{PRODUCT_NAME} Development Setup\n", style="bold cyan")
        body.append(f"Environment: {run_config.environment}\n")
        body.append(f"Server Port: {run_config.server_port}\n")
        body.append(f"Client Port: {run_config.client_port}")
        self.console.print(Panel(body, border_style="cyan", expand=False))

    def print_success(self, targets: Iterable[Target], package_manager: str) -> None:
        """Print the completion banner with next-step instructions."""
        self.console.print()
        self.console.print(Panel(
            Text("✓ Setup Complete!", style="bold green"),
            border_style="green",
            expand=False
        ))
        self.console.print()
        self.console.print(Text("To start development servers:"))
        for target in targets:
            self.console.print(Text(f"  cd {target.directory.name} && {package_manager} run dev", style="cyan"))
        self.console.print()

    def print_failure(self, exit_code: int) -> None:
        """Print the final diagnostic line for a failed run."""
        self.error_console.print()
        self.error_console.print(Text(f"[ERROR] Setup failed with exit code {exit_code}", style="bold red"))

    def print_step_summary(self, report: SetupReport) -> None:
        """Print a table of step outcomes."""
        table = Table(title="Setup Steps")
        table.add_column("Step", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Details", style="dim")

        for record in report.steps:
            symbol, style = _STATUS_STYLES[record.status]
            table.add_row(
                record.step.value,
                Text(f"{symbol} {record.status.value}", style=style),
                Text(record.detail or "")
            )

        self.console.print(table)
