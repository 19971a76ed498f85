"""Best-effort report of the live release after a run."""

from gitship.core.commands import ShellCommand
from gitship.core.remote_state import list_releases, read_current_target, release_name_of
from gitship.core.steps import DeployContext
from gitship.models.config import DeploymentMode


def summarize(context: DeployContext) -> None:
    executor = context.executor
    layout = context.layout
    logger = context.logger

    live = release_name_of(read_current_target(executor, layout))

    if context.config.mode == DeploymentMode.DEPLOY:
        revision = executor.execute(ShellCommand.of("cat", layout.revision_file)).strip()
        commit = executor.execute(ShellCommand.of("cat", layout.commit_file)).strip()
        logger.success(f"Release {live} is live at {revision[:7]}: {commit}")
    else:
        logger.success(f"Rolled back to release {live}")

    releases = list_releases(executor, layout)
    logger.info(f"Releases on host ({len(releases)}): {', '.join(reversed(releases))}")
