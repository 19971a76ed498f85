"""gitship - Rollback command"""

import click

from gitship.base import DeploymentCommand
from gitship.commands.options import build_overrides, deployment_options
from gitship.models.config import DeploymentMode


class RollbackCommand(DeploymentCommand):
    """Republish the release preceding the current one."""

    mode = DeploymentMode.ROLLBACK

    def execute(self) -> None:
        """Execute rollback command."""
        config = self.load_configuration()

        self.show_header(
            title="Rollback",
            details={
                "Directory": config.deployment_directory,
                "Host": config.ssh_host,
            },
        )
        self.init_logger("rollback")

        pipeline = self.create_pipeline(config)
        release = pipeline.run_rollback(config)

        self.console.print()
        self.print_success(f"Rolled back to release {release.name} on {config.ssh_host}")
        self.print_log_location()


@click.command(name="rollback")
@deployment_options
def rollback(config_path, hooks_path, log_dir, verbose, **options):
    """
    Revert to the previous release

    \b
    Examples:
      gitship rollback -d /srv/app -H web1 -r git@example.com:me/app.git
      gitship rollback                 # settings from .deploy-configuration

    \b
    The previous release is the one just before the current one under
    releases/. Nothing is fetched, built or deleted.
    """
    cmd = RollbackCommand(
        build_overrides(options),
        config_path=config_path,
        hooks_path=hooks_path,
        verbose=verbose,
        log_dir=log_dir,
    )
    cmd.run()
