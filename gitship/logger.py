"""
Logging system for gitship
Provides real-time logging to files with clean console output
"""

import os
import re
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from gitship.constants import (
    DEFAULT_LOG_DIR,
    LOG_DATE_FORMAT,
    LOG_DIR_ENV_VAR,
    LOG_TAIL_LINES,
    LOG_TIME_FORMAT,
)

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def resolve_log_dir(log_dir: Optional[Path] = None) -> Path:
    """Pick the log directory: explicit value, environment, then default."""
    if log_dir is not None:
        return Path(log_dir).expanduser()
    return Path(os.environ.get(LOG_DIR_ENV_VAR, DEFAULT_LOG_DIR)).expanduser()


class DeployLogger:
    """
    Manages logging for one gitship operation
    - Writes all output to a log file in real-time
    - Shows clean progress UI in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        operation: str,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        ui_console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'deploy', 'rollback')
            verbose: If True, show all output in console
            log_dir: Root of the log tree (default: ~/.gitship/logs)
            ui_console: Rich console for the progress UI
        """
        self.operation = operation
        self.verbose = verbose
        self.console = ui_console or console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: {log_dir}/{date}/{time}_{operation}.log
        now = datetime.now()
        logs_dir = resolve_log_dir(log_dir) / now.strftime(LOG_DATE_FORMAT)
        logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time output
        self.log_file = open(self.log_path, "a", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
gitship log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (DEBUG, INFO, WARNING, ERROR, FATAL)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if self.log_file:
            for line in message.splitlines() or [""]:
                self.log_file.write(f"[{timestamp}] [{level}] {line}\n")
            self.log_file.flush()

        if self.verbose:
            if level in ("ERROR", "FATAL"):
                self.console.print(f"[red]{escape(message)}[/red]", highlight=False)
            elif level == "WARNING":
                self.console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)
            elif level == "DEBUG":
                self.console.print(f"[dim]{escape(message)}[/dim]", highlight=False)
            else:
                self.console.print(message, markup=False, highlight=False)

    def debug(self, message: str):
        self.log(message, "DEBUG")

    def info(self, message: str):
        """Log an informational message, shown in the console as a sub-item."""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]{escape(message)}[/dim]", highlight=False)

    def error(self, message: str):
        self.log(message, "ERROR")

        if not self.verbose:
            self.console.print(f"  [red]{escape(message)}[/red]", highlight=False)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output

        Always written to the log file, shown in console only if verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)

        if self.log_file:
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")
            self.log_file.flush()

        if self.verbose:
            self.console.print(clean_output, markup=False, highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        # Clear markers for grepping
        error_block = f"""
{"!" * 80}
[FATAL] ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            self.console.print()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]", highlight=False)
        if context:
            self.console.print(
                f"  [color(208)]{escape(context)}[/color(208)]", highlight=False
            )

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(
                f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]", highlight=False
            )

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {escape(message)}[/dim]", highlight=False)

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(
                f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]", highlight=False
            )

    def tail(self, lines: int = LOG_TAIL_LINES) -> List[str]:
        """Return the last lines of the log file, skipping blanks and markers."""
        if not self.log_path or not self.log_path.exists():
            return []
        with open(self.log_path) as handle:
            meaningful = (
                line.rstrip("\n")
                for line in handle
                if line.strip() and line.strip().strip("!=")
            )
            return list(deque(meaningful, maxlen=lines))

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type != SystemExit and not self.has_errors:
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False  # Don't suppress exceptions
