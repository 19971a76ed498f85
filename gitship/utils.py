"""gitship - Utility functions"""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from gitship.constants import CONFIG_FILE_NAMES, RELEASE_NAME_FORMAT


def new_release_name(now: Optional[datetime] = None) -> str:
    """
    Generate a release name for a deploy started at `now`.

    UTC keeps names increasing across daylight-saving changes.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return now.strftime(RELEASE_NAME_FORMAT)


def find_config_file(directory: Optional[Path] = None) -> Optional[Path]:
    """Smart configuration file detection"""
    directory = directory or Path.cwd()

    for name in CONFIG_FILE_NAMES:
        path = directory / name
        if path.is_file():
            return path

    return None


def split_words(value: Optional[str]) -> List[str]:
    """Split a comma or whitespace separated setting into words."""
    if not value:
        return []
    return [word for word in re.split(r"[,\s]+", value.strip()) if word]


def parse_listing(output: str) -> List[str]:
    """Parse one-entry-per-line output of a remote directory listing."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def parse_framework_specs(specs: Iterable[str]) -> dict:
    """
    Parse `name[:option]` framework selections.

    Example:
        parse_framework_specs(["python", "django:static"])
        -> {"python": None, "django": "static"}
    """
    frameworks = {}
    for spec in specs:
        name, _, option = spec.partition(":")
        frameworks[name.strip().lower()] = option.strip() or None
    return frameworks
