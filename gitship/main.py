#!/usr/bin/env python3
"""gitship CLI - Main entry point"""

import functools
import os
import sys

import rich_click as click
from click.exceptions import ClickException, UsageError
from rich.console import Console

from gitship import __version__
from gitship.commands import deploy, releases, rollback

# Configure rich-click help output
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.ALIGN_ERRORS_PANEL = "left"

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n")
            if e.ctx and e.ctx.command:
                console.print(
                    f"[dim]Run[/dim] [cyan]gitship {e.ctx.command.name} --help[/cyan] "
                    "[dim]for usage information[/dim]\n"
                )
            sys.exit(e.exit_code)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="gitship")
def cli():
    """
    gitship - Deploy a git repository to a remote SSH server.

    \b
    Each deploy clones the branch into releases/<timestamp>, prepares it,
    then atomically switches the 'current' symlink to it.

    \b
    Quick Start:
      gitship deploy -r git@example.com:me/app.git -d /srv/app -H web1
      gitship releases                 # List releases on the host
      gitship rollback                 # Back to the previous release
    """


cli.add_command(deploy)
cli.add_command(rollback)
cli.add_command(releases)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli(standalone_mode=False)


if __name__ == "__main__":
    main()
