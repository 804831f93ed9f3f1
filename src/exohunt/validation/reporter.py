"""
Console reporter for preflight results.

Formats the header mapping using Rich for clear, colored output.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exohunt.validation.preflight import PreflightResult


class ConsoleReporter:
    """Formats and displays preflight results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_result(
        self, result: PreflightResult, required_fields: tuple[str, ...]
    ) -> None:
        """
        Print the header mapping table followed by a summary.

        Args:
            result: Preflight result to display.
            required_fields: Canonical columns that were required.
        """
        table = Table(title="Column Mapping", show_header=True)
        table.add_column("CSV Header", style="cyan", no_wrap=True)
        table.add_column("Canonical Column", style="blue")
        table.add_column("Status", justify="center")

        for header, canonical in result.header_mapping.items():
            table.add_row(
                escape(header),
                canonical or "-",
                self._format_status(canonical, required_fields),
            )

        self.console.print(table)
        self._print_summary(result, required_fields)

    def _format_status(self, canonical: str | None, required: tuple[str, ...]) -> str:
        """
        Format mapping status with color.

        Args:
            canonical: Canonical column, None if unmapped.
            required: Required canonical columns.

        Returns:
            Formatted status string with color markup.
        """
        if canonical is None:
            return "[yellow]Unmapped[/yellow]"
        if canonical in required:
            return "[green]Required[/green]"
        return "[green]Mapped[/green]"

    def _print_summary(
        self, result: PreflightResult, required_fields: tuple[str, ...]
    ) -> None:
        """
        Print summary statistics.

        Args:
            result: Preflight result.
            required_fields: Canonical columns that were required.
        """
        total = len(result.header_mapping)
        unmapped = len(result.unmapped_headers)

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Total columns: {total}")
        self.console.print(f"  [green]Mapped: {total - unmapped}[/green]")
        self.console.print(f"  [yellow]Unmapped: {unmapped}[/yellow]")
        self.console.print(f"  Required: {', '.join(required_fields) or '-'}")

        if result.passed:
            self.console.print("[green]Preflight passed[/green]")
        else:
            self.console.print(
                "[bold red]Preflight failed, missing required column(s): "
                f"{', '.join(result.missing_required)}[/bold red]"
            )
