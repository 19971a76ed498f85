"""
Base Command Class

Abstract base for all gitship CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from gitship.exceptions import GitshipError
from gitship.logger import DeployLogger
from gitship.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling (one place turns any error into exit status 1)
    - Consistent structure
    """

    def __init__(self, verbose: bool = False, log_dir: Optional[Path] = None):
        self.verbose = verbose
        self.log_dir = log_dir
        self.console = Console()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, command_name: str) -> DeployLogger:
        """
        Initialize command logger.

        Args:
            command_name: Command name, used in the log file name

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            command_name, verbose=self.verbose, log_dir=self.log_dir, ui_console=self.console
        )
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]", highlight=False)

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]", highlight=False)

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]", highlight=False)

    def print_log_location(self) -> None:
        if self.logger and self.logger.log_path:
            self.console.print(
                f"\n[dim]Logs saved to:[/dim] {escape(str(self.logger.log_path))}\n",
                highlight=False,
            )

    def explain_failure(self) -> None:
        """Point at the log file and show its last lines."""
        if not self.logger:
            return

        self.console.print(
            f"\n[red]{'-' * 12}\nRun failed. You may find information in the log file "
            f"{escape(str(self.logger.log_path))}. Below are the last lines:[/red]\n",
            highlight=False,
        )
        for line in self.logger.tail():
            self.console.print(line, markup=False, highlight=False)

    def handle_error(self, error: GitshipError) -> None:
        """Surface a gitship error through the fatal channel."""
        if self.logger and self.logger.has_errors:
            # Already reported by the pipeline
            return
        if self.logger:
            self.logger.log_error(error.message, context=error.context)
        else:
            self.print_error(error.message)
            if error.context:
                self.print_dim(f"Context: {error.context}")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Raises:
            SystemExit: 1 on any error, 130 when interrupted
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log_error("Operation cancelled by user")
            self.print_log_location()
            raise SystemExit(130)
        except SystemExit:
            raise
        except GitshipError as e:
            self.handle_error(e)
            self.explain_failure()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(
                f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n", highlight=False
            )
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self.explain_failure()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
