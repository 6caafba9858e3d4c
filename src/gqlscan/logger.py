"""Logging for gqlscan with Rich console output and CLI helpers."""

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class GqlScanLogger(logging.Logger):
    """
    Logger that combines standard logging levels with a few CLI display helpers.

    Use the standard methods (debug, info, warning, error) for diagnostics and
    the helpers (success, rule, print_dict) for command output.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """Print a plain message (with Rich markup support)."""
        self.console.print(message)

    def success(self, message: str) -> None:
        """Print a success message in green with a checkmark."""
        self.print(f"[green]✓[/green] {message}")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """Print a horizontal rule with a title."""
        self.console.rule(f"[{style}]{title}")

    def print_dict(self, data: dict[str, Any]) -> None:
        """
        Print dictionary data as syntax highlighted JSON.

        Args:
            data: Dictionary to display
        """
        self.console.print_json(json.dumps(data, indent=2, default=str))


def get_logger(name: str = "gqlscan") -> GqlScanLogger:
    """
    Get or create a gqlscan logger instance.

    Args:
        name: Logger name (default: "gqlscan")

    Returns:
        GqlScanLogger instance
    """
    logging.setLoggerClass(GqlScanLogger)
    logger = logging.getLogger(name)
    logging.setLoggerClass(logging.Logger)

    return logger  # type: ignore[return-value]
