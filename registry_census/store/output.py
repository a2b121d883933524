"""Output generators for analysis reports."""

import json
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

from ..analyzers.aggregator import AnalysisResult, format_percentage
from ..analyzers.classifier import Category

_default_console = Console()

LIST_PREVIEW = 10


class OutputGenerator:
    """Render an AnalysisResult for humans or machines."""

    def __init__(self, result: AnalysisResult, console: Console | None = None):
        self.result = result
        self.console = console or _default_console

    def to_json(self) -> str:
        """JSON report document."""
        return json.dumps(self.result.to_dict(), indent=2)

    def write_json(self, path: Path | str) -> Path:
        """Write the JSON report to `path`, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n")
        return path

    def print_json(self) -> None:
        # Plain print so the document stays parseable when piped
        print(self.to_json())

    def render_text(self) -> None:
        """Print the human-readable report."""
        result = self.result
        out = self.console

        out.print(Rule("[bold]MCP REGISTRY ANALYSIS[/bold]"))
        out.print(f"\nTimestamp: {result.timestamp}")
        out.print(f"Total Servers: {result.total_servers}")

        if result.truncated:
            out.print(
                "[yellow]Warning:[/yellow] page limit reached, the registry listing is incomplete"
            )

        out.print()
        out.print(Rule("BUNDLEABILITY BREAKDOWN"))
        out.print(self._breakdown_table())

        unbundleable = result.unbundleable
        out.print(
            f"\n[bold]→ Total unbundleable:[/bold] {unbundleable} "
            f"({format_percentage(unbundleable, result.total_servers)})"
        )

        self._print_server_list(
            "REMOTE-ONLY SERVERS (hosted services, no source)",
            result.servers(Category.REMOTE_ONLY),
        )
        self._print_server_list(
            "NO SOURCE SERVERS (missing/invalid repo URL)",
            result.servers(Category.NO_SOURCE),
        )

        out.print()
        out.print(Rule("[green]Analysis complete![/green]"))

    def _breakdown_table(self) -> Table:
        """Counts and shares per category."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Category")
        table.add_column("Servers", justify="right")
        table.add_column("Share", justify="right")

        labels = {
            Category.BUNDLEABLE: "[green]✓[/green] Bundleable (has source repo)",
            Category.REMOTE_ONLY: "[yellow]⊘[/yellow] Remote-only (no source code)",
            Category.NO_SOURCE: "[red]✗[/red] No source (invalid/missing URL)",
        }
        for category, label in labels.items():
            table.add_row(
                label,
                str(self.result.count(category)),
                self.result.percentage(category),
            )
        return table

    def _print_server_list(self, title: str, servers: tuple[str, ...]) -> None:
        """Print the first few identifiers of a category."""
        out = self.console
        out.print()
        out.print(Rule(title))

        if not servers:
            out.print("  None")
            return

        for name in servers[:LIST_PREVIEW]:
            out.print(f"  • {name}", markup=False)
        if len(servers) > LIST_PREVIEW:
            out.print(f"  ... and {len(servers) - LIST_PREVIEW} more")
