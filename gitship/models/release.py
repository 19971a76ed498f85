"""
Release Models

A release is one checkout under `<deployment_directory>/releases/<name>`.
"""

import posixpath
from dataclasses import dataclass

from gitship.constants import (
    CURRENT_COMMIT_FILE,
    CURRENT_LINK,
    CURRENT_REVISION_FILE,
    CURRENT_TMP_LINK,
    RELEASES_DIR,
    SHARED_DIR,
)


@dataclass(frozen=True)
class Release:
    """A release directory on the remote host."""

    name: str
    path: str

    def __str__(self) -> str:
        return self.name


class ReleaseLayout:
    """Remote paths derived from the deployment directory."""

    def __init__(self, deployment_directory: str):
        self.root = deployment_directory

    @property
    def releases_dir(self) -> str:
        return posixpath.join(self.root, RELEASES_DIR)

    @property
    def shared_dir(self) -> str:
        return posixpath.join(self.root, SHARED_DIR)

    @property
    def current(self) -> str:
        return posixpath.join(self.root, CURRENT_LINK)

    @property
    def current_tmp(self) -> str:
        return posixpath.join(self.root, CURRENT_TMP_LINK)

    @property
    def revision_file(self) -> str:
        return posixpath.join(self.root, CURRENT_REVISION_FILE)

    @property
    def commit_file(self) -> str:
        return posixpath.join(self.root, CURRENT_COMMIT_FILE)

    def release(self, name: str) -> Release:
        """Build the release living under `releases/<name>`."""
        return Release(name=name, path=posixpath.join(self.releases_dir, name))

    def shared_path(self, relative_path: str) -> str:
        """Canonical location of a shared path."""
        return posixpath.join(self.shared_dir, relative_path)

    def __repr__(self) -> str:
        return f"ReleaseLayout(root={self.root})"
