"""Progress narration for operators.

A reporter has four channels (info, warning, error, success). The pipeline
only ever calls them for their side effect; nothing reads a return value.
"""

import logging
from typing import Protocol

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("registry_census")


class Reporter(Protocol):
    """Anything that can narrate progress on four channels."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...


class ConsoleReporter:
    """Print progress to stderr with rich, mirroring it to the stdlib logger."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def info(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"[blue]\\[INFO][/blue] {escape(message)}")

    def warning(self, message: str) -> None:
        logger.warning(message)
        self.console.print(f"[yellow]\\[WARN][/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        logger.error(message)
        self.console.print(f"[red]\u2717 \\[ERROR][/red] {escape(message)}")

    def success(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"[green]\u2713 \\[SUCCESS][/green] {escape(message)}")


class NullReporter:
    """Reporter that discards everything except what reaches the logger."""

    def info(self, message: str) -> None:
        logger.debug(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)

    def success(self, message: str) -> None:
        logger.debug(message)
