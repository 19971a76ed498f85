"""gitship - Releases command"""

from datetime import datetime
from typing import List, Optional

import click
from rich.table import Table

from gitship.base import DeploymentCommand
from gitship.commands.options import build_overrides, deployment_options
from gitship.constants import RELEASE_NAME_FORMAT
from gitship.core.remote_state import (
    PointerState,
    list_releases,
    pointer_state,
    read_current_target,
    release_name_of,
    releases_dir_exists,
)
from gitship.models.release import ReleaseLayout


def format_release_time(name: str) -> str:
    """Readable creation time of a release, '-' for foreign names."""
    try:
        created = datetime.strptime(name, RELEASE_NAME_FORMAT)
    except ValueError:
        return "-"
    return created.strftime("%Y-%m-%d %H:%M:%S UTC")


class ReleasesCommand(DeploymentCommand):
    """Show the releases present on the host, newest first."""

    def execute(self) -> None:
        """Execute releases command."""
        config = self.load_configuration()

        self.show_header(
            title="Releases",
            details={"Directory": config.deployment_directory, "Host": config.ssh_host},
        )
        logger = self.init_logger("releases")
        logger.step(f"Reading releases on {config.ssh_host}")

        executor = self.create_executor(config)
        layout = ReleaseLayout(config.deployment_directory)

        if not releases_dir_exists(executor, layout):
            self.console.print("\n[yellow]⚠️  No releases found[/yellow]")
            self.print_dim("Deploy first: gitship deploy")
            return

        current: Optional[str] = None
        if pointer_state(executor, layout) == PointerState.SYMLINK:
            current = release_name_of(read_current_target(executor, layout))

        names = list_releases(executor, layout)
        self.console.print(self.render_table(names, current, config.keep_releases))
        logger.success(f"{len(names)} release(s) found")

    def render_table(self, names: List[str], current: Optional[str], keep: int) -> Table:
        table = Table(
            title=f"Releases (keeping {keep})",
            show_header=True,
            header_style="bold cyan",
            padding=(0, 1),
        )
        table.add_column("Status", style="green", no_wrap=True)
        table.add_column("Release", style="cyan")
        table.add_column("Created", style="dim")

        for idx, name in enumerate(reversed(names)):
            if name == current:
                status = "● CURRENT"
            else:
                status = f"  #{idx}"
            table.add_row(
                status,
                name,
                format_release_time(name),
                style=None if name == current else "dim",
            )
        return table


@click.command(name="releases")
@deployment_options
def releases(config_path, hooks_path, log_dir, verbose, **options):
    """
    Show releases on the host, newest first

    \b
    Examples:
      gitship releases -d /srv/app -H web1 -r git@example.com:me/app.git
    """
    cmd = ReleasesCommand(
        build_overrides(options),
        config_path=config_path,
        hooks_path=hooks_path,
        verbose=verbose,
        log_dir=log_dir,
    )
    cmd.run()
