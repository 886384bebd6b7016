"""Main CLI interface for version detector."""

from pathlib import Path
from typing import List, NoReturn, Optional
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..utils.logging import setup_logging, get_logger
from ..utils.performance import PerformanceMonitor
from ..core.exceptions import VersionDetectorError
from ..core.factory import VersionFactory
from ..core.registry import registry
from ..core.version import VersionResult
from ..output.formatters import ConsoleFormatter, JSONFormatter

app = typer.Typer(
    name="versiondetect",
    help="Locate and normalize version tokens embedded in free-form text",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")

REGEX_HELP = "Custom grammar pattern with named groups (overrides --grammar)"
GRAMMAR_HELP = "Registered grammar name"


def _build_factory(regex: Optional[str], grammar: str) -> VersionFactory:
    """Create a factory from CLI options.

    Args:
        regex: Custom pattern, takes precedence when given
        grammar: Registered grammar name

    Returns:
        Configured factory
    """
    if regex:
        return VersionFactory(pattern=regex)
    return VersionFactory.from_grammar(grammar)


def _emit(
    result: VersionResult,
    source: str,
    factory: VersionFactory,
    markers: Optional[List[str]] = None,
    json_output: bool = False,
    output: Optional[Path] = None
) -> None:
    """Save a result to the JSON output file, if any, then render it."""
    json_formatter = JSONFormatter(output)
    data = json_formatter.format_result(
        result,
        source=source,
        markers=markers,
        grammar=factory.grammar.name
    )

    if output:
        try:
            json_formatter.save_results(data)
        except OSError as e:
            _fail(
                VersionDetectorError(f"Could not write results: {e}", details={"output": str(output)}),
                json_output
            )

    if json_output:
        typer.echo(json_formatter.dumps(data))
    else:
        ConsoleFormatter(console).format_version(result, source, markers)


def _fail(error: VersionDetectorError, json_output: bool) -> NoReturn:
    """Report a caller error and exit with status 1."""
    logger.debug(f"Command failed: {error.message}")

    if json_output:
        json_formatter = JSONFormatter()
        typer.echo(json_formatter.dumps(json_formatter.format_error(error.message, error.details)))
    else:
        ConsoleFormatter(console).format_error(error.message, error.error_code)

    raise typer.Exit(1)


@app.command()
def parse(
    text: str = typer.Argument(..., help="Version text, e.g. '2.0b8'"),
    regex: Optional[str] = typer.Option(None, "--regex", "-r", help=REGEX_HELP),
    grammar: str = typer.Option("default", "--grammar", "-g", help=GRAMMAR_HELP),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
) -> None:
    """Extract a version from text that starts with it."""
    setup_logging(verbose=verbose)

    try:
        factory = _build_factory(regex, grammar)
        result = factory.set(text)
    except VersionDetectorError as e:
        _fail(e, json_output)

    _emit(result, text, factory, json_output=json_output, output=output)


@app.command()
def detect(
    text: str = typer.Argument(..., help="Free-form text such as a user agent"),
    markers: List[str] = typer.Option(
        ...,
        "--marker",
        "-m",
        help="Marker token preceding the version; repeat in priority order"
    ),
    regex: Optional[str] = typer.Option(None, "--regex", "-r", help=REGEX_HELP),
    grammar: str = typer.Option("default", "--grammar", "-g", help=GRAMMAR_HELP),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    performance: bool = typer.Option(
        False,
        "--performance",
        help="Show performance summary"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
) -> None:
    """Locate a version after the first matching marker and extract it."""
    setup_logging(verbose=verbose)
    monitor = PerformanceMonitor()

    try:
        factory = _build_factory(regex, grammar)
        with monitor.measure("detect_version"):
            result = factory.detect_version(text, markers)
    except VersionDetectorError as e:
        _fail(e, json_output)

    _emit(result, text, factory, markers=markers, json_output=json_output, output=output)

    if performance and not json_output:
        ConsoleFormatter(console).format_performance_summary(monitor.get_summary())


@app.command()
def load(
    data: str = typer.Argument(..., help="JSON object with version fields"),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
) -> None:
    """Rebuild a version from its JSON field mapping."""
    setup_logging(verbose=verbose)

    factory = VersionFactory()
    try:
        result = factory.from_json(data)
    except VersionDetectorError as e:
        _fail(e, json_output)

    _emit(result, data, factory, json_output=json_output)


@app.command()
def grammars() -> None:
    """List registered grammars."""
    names = registry.get_supported_grammars()
    ConsoleFormatter(console).format_grammars([registry.get_grammar(name) for name in names])


@app.command()
def info() -> None:
    """Show version detector information."""
    from .. import __version__

    console.print(Panel.fit(
        "[bold blue]Version Detector[/bold blue]\n"
        "Locates version tokens in free-form text and normalizes them\n"
        + escape("into major.minor.micro[.patch[.micropatch]][-stability][+build]"),
        title=f"Information (v{__version__})"
    ))

    console.print(f"\n[bold]Grammars:[/bold] {', '.join(registry.get_supported_grammars())}")


def main() -> None:
    """Main entry point for version detector CLI."""
    app()


if __name__ == "__main__":
    main()
