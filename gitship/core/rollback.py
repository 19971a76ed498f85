"""Rollback target resolution from the remote directory state alone."""

from typing import Iterable

from gitship.core.remote_state import (
    PointerState,
    list_releases,
    pointer_state,
    read_current_target,
    release_name_of,
)
from gitship.exceptions import RollbackUnavailableError
from gitship.logger import DeployLogger
from gitship.models.release import Release, ReleaseLayout


def previous_release(current_target: str, names: Iterable[str]) -> str:
    """
    Name of the release immediately preceding the current one.

    Args:
        current_target: Target of the `current` link
        names: Entries found under releases/

    Raises:
        RollbackUnavailableError: If the current release is not listed or is the oldest
    """
    current = release_name_of(current_target)
    ordered = sorted(set(names))

    if current not in ordered:
        raise RollbackUnavailableError(
            f"Current release '{current}' not found under releases/",
            context=f"current -> {current_target}",
        )

    index = ordered.index(current)
    if index == 0:
        raise RollbackUnavailableError(
            "No previous release available",
            context=f"'{current}' is the oldest release on the host",
        )
    return ordered[index - 1]


class RollbackResolver:
    """Computes the rollback target by inspecting `current` and `releases/`."""

    def __init__(self, executor, layout: ReleaseLayout, logger: DeployLogger):
        self.executor = executor
        self.layout = layout
        self.logger = logger

    def resolve(self) -> Release:
        """
        Resolve the release preceding the published one.

        Raises:
            RollbackUnavailableError: If nothing is published or nothing precedes it
        """
        if pointer_state(self.executor, self.layout) != PointerState.SYMLINK:
            raise RollbackUnavailableError(
                "No current release",
                context=f"{self.layout.current} is not a symbolic link; deploy first",
            )

        target = read_current_target(self.executor, self.layout)
        names = list_releases(self.executor, self.layout)
        previous = self.layout.release(previous_release(target, names))

        self.logger.info(f"Current release: {release_name_of(target)}")
        self.logger.info(f"Rolling back to: {previous.name}")
        return previous
