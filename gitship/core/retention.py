"""Release retention: keep only the newest releases."""

import posixpath
from typing import Iterable, List

from gitship.core.commands import ShellCommand
from gitship.core.remote_state import list_releases
from gitship.core.steps import DeployContext
from gitship.logger import DeployLogger
from gitship.models.release import ReleaseLayout


def select_expired(names: Iterable[str], keep: int) -> List[str]:
    """
    Pick the releases to delete.

    Release names grow with creation time, so the `keep` greatest names are
    the newest ones.

    Args:
        names: Entries found under releases/
        keep: Number of releases to keep (>= 1)

    Returns:
        Names outside the kept set, ascending
    """
    if keep < 1:
        raise ValueError(f"keep must be at least 1, got {keep}")

    newest_first = sorted(set(names), reverse=True)
    return sorted(newest_first[keep:])


class RetentionCleaner:
    """Deletes all but the newest releases on the host."""

    def __init__(self, executor, layout: ReleaseLayout, logger: DeployLogger):
        self.executor = executor
        self.layout = layout
        self.logger = logger

    def clean(self, keep: int) -> List[str]:
        """
        Delete expired releases.

        Returns:
            Names of the deleted releases (empty when nothing expired)
        """
        expired = select_expired(list_releases(self.executor, self.layout), keep)
        if not expired:
            self.logger.info(f"No release to delete (keeping {keep})")
            return []

        paths = [posixpath.join(self.layout.releases_dir, name) for name in expired]
        self.executor.execute(ShellCommand.of("rm", "-rf", *paths))
        self.logger.info(f"Deleted {len(expired)} old release(s): {', '.join(expired)}")
        return expired


def clean_old_releases(context: DeployContext) -> None:
    cleaner = RetentionCleaner(context.executor, context.layout, context.logger)
    cleaner.clean(context.config.keep_releases)
