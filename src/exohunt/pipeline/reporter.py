"""
Console reporter for submissions.

Prints the status log and the returned metrics with Rich.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exohunt.pipeline.status import StatusLog
from exohunt.training.metrics import ClassReport, MetricsReport, format_percent


class SubmissionReporter:
    """Formats and displays submission output to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize submission reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_status(self, status_log: StatusLog) -> None:
        """Print the visible status lines in order."""
        lines = status_log.visible_lines()
        if not lines:
            self.console.print("[dim]Training logs will appear here...[/dim]")
            return
        for line in lines:
            self.console.print(escape(line))

    def print_metrics(self, report: MetricsReport) -> None:
        """
        Print a summary of the latest model and its per-class report.

        Args:
            report: Parsed metrics report.
        """
        model = report.latest
        if model is None:
            return

        self.console.print()
        table = Table(title=f"Latest Metrics: {model.model_name} v{model.version}")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")
        table.add_row("Accuracy", format_percent(model.metrics.accuracy, 1))
        table.add_row("F1 (macro)", format_percent(model.metrics.f1_macro, 1))
        table.add_row(
            "Precision (macro)", format_percent(model.metrics.precision_macro, 1)
        )
        table.add_row("Recall (macro)", format_percent(model.metrics.recall_macro, 1))
        if model.metrics.roc_auc_ovr is not None:
            table.add_row("ROC AUC (OvR)", f"{model.metrics.roc_auc_ovr:.3f}")
        self.console.print(table)

        per_class = {
            label: entry
            for label, entry in model.report.items()
            if isinstance(entry, ClassReport)
        }
        if not per_class:
            return

        classes = Table(title="Per-class Report")
        classes.add_column("Class", style="cyan")
        classes.add_column("Precision", justify="right")
        classes.add_column("Recall", justify="right")
        classes.add_column("F1", justify="right")
        classes.add_column("Support", justify="right")
        for label, entry in per_class.items():
            classes.add_row(
                escape(label),
                f"{entry.precision:.3f}",
                f"{entry.recall:.3f}",
                f"{entry.f1_score:.3f}",
                f"{entry.support:g}",
            )
        self.console.print(classes)
