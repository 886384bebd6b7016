"""Output formatters for version detector results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.grammar import Grammar
from ..core.version import VERSION_FIELDS, VersionResult
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for detection results."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_version(
        self,
        result: VersionResult,
        source: str,
        markers: Optional[Sequence[Any]] = None
    ) -> None:
        """Display a single detection result.

        Args:
            result: Version or NullVersion
            source: Text the version was read from
            markers: Markers used to locate the version, if any
        """
        if not result.found:
            self.console.print(Panel(
                f"No version detected in: {escape(source)}",
                title="Not found",
                style="yellow"
            ))
            return

        self.console.print(self._create_fields_table(result))
        self.console.print(f"Version: [bold green]{result.get_version()}[/bold green]")

        if markers:
            usable = [str(marker) for marker in markers if marker]
            self.console.print(f"Markers: {escape(', '.join(usable))}", style="dim")

    def _create_fields_table(self, result: VersionResult) -> Table:
        """Create the version fields table.

        Args:
            result: Version to render

        Returns:
            Rich table with one row per field
        """
        table = Table(title="Version Fields")

        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")

        for name, value in result.to_dict().items():
            table.add_row(name, "-" if value is None else value)

        table.add_row("beta", str(result.is_beta()))
        table.add_row("alpha", str(result.is_alpha()))

        return table

    def format_grammars(self, grammars: List[Grammar]) -> None:
        """Display registered grammars.

        Args:
            grammars: Grammars to list
        """
        table = Table(title="Registered Grammars")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Groups", style="green")

        for grammar in grammars:
            table.add_row(grammar.name, ", ".join(grammar.groups))

        self.console.print(table)

    def format_performance_summary(self, summary: Dict[str, Any]) -> None:
        """Format and display performance summary.

        Args:
            summary: Performance summary dictionary
        """
        if not summary:
            return

        table = Table(title="Performance Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Total Executions", str(summary["total_executions"]))
        table.add_row("Total Time", f"{summary['total_time']:.6f}s")
        table.add_row("Average Time", f"{summary['average_time']:.6f}s")

        if "max_peak_memory_kb" in summary:
            table.add_row("Max Peak Memory", f"{summary['max_peak_memory_kb']:.2f} KB")

        self.console.print(table)

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        """Format and display error message.

        Args:
            error: Error message
            details: Optional error details
        """
        content = f"[red]{escape(error)}[/red]"
        if details:
            content += f"\n\n[dim]{escape(details)}[/dim]"

        self.console.print(Panel(content, title="Error", style="red"))


class JSONFormatter:
    """JSON formatter for detection results."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Default output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_result(
        self,
        result: VersionResult,
        source: str,
        markers: Optional[Sequence[Any]] = None,
        grammar: Optional[str] = None
    ) -> Dict[str, Any]:
        """Format a detection result as JSON-ready data.

        Args:
            result: Version or NullVersion
            source: Text the version was read from
            markers: Markers used to locate the version, if any
            grammar: Name of the grammar used

        Returns:
            Formatted result dictionary
        """
        fields = result.to_dict()

        return {
            "found": result.found,
            "version": result.get_version(),
            "fields": {name: fields[name] for name in VERSION_FIELDS},
            "is_beta": result.is_beta(),
            "is_alpha": result.is_alpha(),
            "metadata": {
                "source": source,
                "markers": [marker for marker in markers or [] if isinstance(marker, str)],
                "grammar": grammar,
                "timestamp": datetime.now().isoformat(),
            },
        }

    def dumps(self, results: Dict[str, Any]) -> str:
        return json.dumps(results, indent=2, ensure_ascii=False)

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.dumps(results))

            self.logger.info(f"Results saved to {file_path}")
        except OSError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise

    def format_error(self, error: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Format error as JSON.

        Args:
            error: Error message
            details: Optional error details

        Returns:
            Formatted JSON error data
        """
        return {
            "error": {
                "message": error,
                "details": details,
                "timestamp": datetime.now().isoformat()
            }
        }
