"""Steps that populate a new release directory: fetch and shared paths."""

import posixpath

from gitship.constants import RELEASE_REVISION_FILE
from gitship.core.commands import ShellCommand
from gitship.core.steps import DeployContext


def fetch_repository(context: DeployContext) -> None:
    """Clone exactly the configured branch, history-truncated, into the release."""
    config = context.config
    release = context.release
    executor = context.executor

    context.logger.info(
        f"Fetching git repository {config.repository} (branch {config.branch}) into {release.path}"
    )
    executor.execute(ShellCommand.of("mkdir", "-p", release.path))
    executor.execute(
        ShellCommand.of(
            "git",
            "clone",
            "--single-branch",
            "--branch",
            config.branch,
            "--depth",
            "1",
            config.repository,
            release.path,
        ).merge_stderr()
    )
    executor.execute(
        ShellCommand.of("git", "rev-parse", "HEAD")
        .redirect_to(RELEASE_REVISION_FILE)
        .in_directory(release.path)
    )


def link_shared_paths(context: DeployContext) -> None:
    """
    Symlink every shared path of the release to its canonical location.

    Paths are linked in declaration order. Whatever the checkout placed at
    a shared path is replaced by the link.
    """
    release = context.release
    layout = context.layout
    executor = context.executor

    for path in context.config.shared_paths:
        shared_path = layout.shared_path(path)
        release_path = posixpath.join(release.path, path)

        context.logger.info(f"Linking {path} -> {shared_path}")
        executor.execute(ShellCommand.of("mkdir", "-p", posixpath.dirname(shared_path)))
        executor.execute(ShellCommand.of("mkdir", "-p", posixpath.dirname(release_path)))
        executor.execute(
            ShellCommand.of("rm", "-rf", release_path).and_then(
                ShellCommand.of("ln", "-s", shared_path, release_path)
            )
        )
