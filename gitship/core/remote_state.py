"""Read-only probes of the remote deployment directory."""

import posixpath
from enum import Enum
from typing import List

from gitship.core.commands import ShellCommand
from gitship.exceptions import DeploymentError
from gitship.models.release import ReleaseLayout
from gitship.utils import parse_listing


class PointerState(Enum):
    """What currently sits at `<deployment_directory>/current`."""

    SYMLINK = "symlink"
    OTHER = "other"
    MISSING = "missing"


def pointer_state(executor, layout: ReleaseLayout) -> PointerState:
    # -L first: a dangling link fails -e but is still a link
    output = executor.execute(
        ShellCommand.format(
            "if [ -L {0} ]; then echo symlink; elif [ -e {0} ]; then echo other; "
            "else echo missing; fi",
            layout.current,
        )
    )
    try:
        return PointerState(last_line(output))
    except ValueError:
        raise DeploymentError(f"Unexpected answer probing {layout.current}", context=output)


def last_line(output: str) -> str:
    """Last non-empty line; login scripts may print before the command runs."""
    lines = parse_listing(output)
    return lines[-1] if lines else ""


def read_current_target(executor, layout: ReleaseLayout) -> str:
    """Target of the `current` link, as stored in the link."""
    return last_line(executor.execute(ShellCommand.of("readlink", layout.current)))


def release_name_of(target: str) -> str:
    """Release name is the final segment of the link target."""
    return posixpath.basename(target.rstrip("/"))


def list_releases(executor, layout: ReleaseLayout) -> List[str]:
    """Entries directly under `releases/`, ascending."""
    output = executor.execute(ShellCommand.of("ls", "-1A", layout.releases_dir))
    return sorted(parse_listing(output))


def releases_dir_exists(executor, layout: ReleaseLayout) -> bool:
    output = executor.execute(
        ShellCommand.format("if [ -d {} ]; then echo yes; else echo no; fi", layout.releases_dir)
    )
    return last_line(output) == "yes"
