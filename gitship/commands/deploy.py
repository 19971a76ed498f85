"""gitship - Deploy command"""

import click

from gitship.base import DeploymentCommand
from gitship.commands.options import build_overrides, deployment_options
from gitship.models.config import DeploymentMode


class DeployCommand(DeploymentCommand):
    """Fetch, prepare and publish a new release."""

    mode = DeploymentMode.DEPLOY

    def execute(self) -> None:
        """Execute deploy command."""
        config = self.load_configuration()

        self.show_header(title="Deploy", details=config.describe())
        self.init_logger("deploy")

        pipeline = self.create_pipeline(config)
        release = pipeline.run_deploy(config)

        self.console.print()
        self.print_success(f"Release {release.name} deployed to {config.ssh_host}")
        self.print_log_location()


@click.command(name="deploy")
@deployment_options
def deploy(config_path, hooks_path, log_dir, verbose, **options):
    """
    Deploy a git repository to a remote SSH server

    \b
    Examples:
      gitship deploy -r git@example.com:me/app.git -d /srv/app -H web1
      gitship deploy -f python -f django:static -s db.sqlite3

    \b
    Settings not given on the command line are read from
    .deploy-configuration (or gitship.yml) in the working directory.
    """
    cmd = DeployCommand(
        build_overrides(options),
        config_path=config_path,
        hooks_path=hooks_path,
        verbose=verbose,
        log_dir=log_dir,
    )
    cmd.run()
