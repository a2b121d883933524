"""Main entry point for registry-census.

Fetches all servers from the official MCP registry and categorizes them by
whether they can be bundled into self-contained packages.
"""

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .analyzers.aggregator import AnalysisResult, analyze
from .config import Settings, load_config
from .crawler.registry_client import RegistryClient
from .errors import ConfigError, RegistryError
from .reporting import ConsoleReporter, Reporter
from .store.output import OutputGenerator

console = Console()


def positive_int(value: str) -> int:
    """argparse type for --limit."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze the MCP registry and report which servers can be bundled from source"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON on stdout",
    )
    parser.add_argument(
        "--limit",
        type=positive_int,
        default=None,
        help="Only analyze the first N servers",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Also write the JSON report to this file",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Route stdlib logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """CLI flags take precedence over the config file."""
    if args.json:
        settings.output_format = "json"
    if args.output:
        settings.output_path = args.output
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ConfigError("--timeout must be positive")
        settings.timeout = args.timeout
    return settings


def run_analysis(settings: Settings, limit: int | None, reporter: Reporter) -> AnalysisResult:
    """Fetch and classify the registry."""
    with RegistryClient(
        base_url=settings.registry_url,
        page_size=settings.page_size,
        timeout=settings.timeout,
    ) as client:
        return analyze(client.fetch_page, limit=limit, reporter=reporter)


def emit_report(settings: Settings, result: AnalysisResult, reporter: Reporter) -> None:
    """Render the report in the configured format."""
    generator = OutputGenerator(result, console=console)

    if settings.output_format == "json":
        generator.print_json()
    else:
        generator.render_text()
        console.print("\nRun with --json for machine-readable output")

    if settings.output_path:
        path = generator.write_json(settings.output_path)
        reporter.success(f"Wrote JSON report to {path}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    reporter = ConsoleReporter()

    try:
        settings = apply_overrides(load_config(args.config), args)
        result = run_analysis(settings, args.limit, reporter)
    except RegistryError as e:
        reporter.error(f"Error analyzing registry: {e}")
        return 1
    except KeyboardInterrupt:
        reporter.warning("Interrupted")
        return 130

    try:
        emit_report(settings, result, reporter)
    except OSError as e:
        reporter.error(f"Could not write report: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
