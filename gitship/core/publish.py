"""
Publish protocol.

`current` is only ever changed by renaming a freshly made `current_tmp`
link over it, so readers see either the old or the new release.
"""

from gitship.constants import (
    CURRENT_COMMIT_FILE,
    CURRENT_LINK,
    CURRENT_REVISION_FILE,
    CURRENT_TMP_LINK,
)
from gitship.core.commands import ShellCommand
from gitship.core.remote_state import PointerState, pointer_state
from gitship.core.steps import DeployContext
from gitship.exceptions import PublishGuardError
from gitship.logger import DeployLogger
from gitship.models.config import DeploymentMode
from gitship.models.release import Release, ReleaseLayout


class PublishProtocol:
    """Atomically repoints `current` at a release."""

    def __init__(self, executor, layout: ReleaseLayout, logger: DeployLogger):
        self.executor = executor
        self.layout = layout
        self.logger = logger

    def check_pointer(self) -> PointerState:
        """
        Refuse to continue if `current` is a regular file or directory.

        Raises:
            PublishGuardError: If `current` exists and is not a symbolic link
        """
        state = pointer_state(self.executor, self.layout)
        if state == PointerState.OTHER:
            raise PublishGuardError(self.layout.current)
        return state

    def publish(self, release: Release, record_revision: bool = True) -> None:
        """
        Make `release` the live release.

        Args:
            release: Release to publish
            record_revision: Write CURRENT_REVISION and CURRENT_COMMIT afterwards
        """
        self.check_pointer()

        self.logger.info(f"Linking {self.layout.current} -> {release.path}")
        self.executor.execute(
            ShellCommand.of("ln", "-nfs", release.path, CURRENT_TMP_LINK)
            .and_then(ShellCommand.of("mv", "-fT", CURRENT_TMP_LINK, CURRENT_LINK))
            .in_directory(self.layout.root)
        )

        if record_revision:
            self.record_revision(release)

    def record_revision(self, release: Release) -> None:
        """Store the published commit hash and subject in the deployment root."""
        self.executor.execute(
            ShellCommand.of("git", "-C", release.path, "rev-parse", "HEAD")
            .redirect_to(CURRENT_REVISION_FILE)
            .in_directory(self.layout.root)
        )
        self.executor.execute(
            ShellCommand.of("git", "-C", release.path, "log", "-1", "--format=%s")
            .redirect_to(CURRENT_COMMIT_FILE)
            .in_directory(self.layout.root)
        )


def publish_release(context: DeployContext) -> None:
    protocol = PublishProtocol(context.executor, context.layout, context.logger)
    protocol.publish(
        context.release,
        record_revision=context.config.mode == DeploymentMode.DEPLOY,
    )
    context.logger.success(f"Release {context.release.name} published")
