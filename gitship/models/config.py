"""
Configuration Model

Immutable resolved settings for one gitship invocation.
"""

import posixpath
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from gitship.constants import (
    DEFAULT_GIT_BRANCH,
    DEFAULT_KEEP_RELEASES,
    FRAMEWORK_DEFAULT_OPTIONS,
    KNOWN_FRAMEWORKS,
)
from gitship.exceptions import ConfigurationError


class DeploymentMode(Enum):
    """What a pipeline run does with the release directory."""

    DEPLOY = "deploy"
    ROLLBACK = "rollback"


def normalize_shared_path(path: str) -> str:
    """
    Normalize a release-relative shared path.

    Raises:
        ConfigurationError: If the path is empty, absolute or escapes the release
    """
    candidate = (path or "").strip()
    if not candidate:
        raise ConfigurationError("Shared path must not be empty")
    if candidate.startswith("/"):
        raise ConfigurationError(
            f"Shared path '{candidate}' must be relative to the release directory",
            context="Example: -s db.sqlite3 -s media/uploads",
        )

    normalized = posixpath.normpath(candidate)
    if normalized == "." or normalized == ".." or normalized.startswith("../"):
        raise ConfigurationError(
            f"Shared path '{candidate}' points outside the release directory"
        )
    return normalized


@dataclass(frozen=True)
class Configuration:
    """Resolved settings, built once and never mutated."""

    deployment_directory: str
    repository: str
    ssh_host: str
    branch: str = DEFAULT_GIT_BRANCH
    keep_releases: int = DEFAULT_KEEP_RELEASES
    frameworks: Mapping[str, Optional[str]] = field(default_factory=dict)
    shared_paths: Tuple[str, ...] = ()
    mode: DeploymentMode = DeploymentMode.DEPLOY
    ssh_key: Optional[str] = None
    ssh_port: Optional[int] = None
    command_timeout: Optional[int] = None

    def __post_init__(self):
        self._require("deployment_directory", "Deployment directory", "-d/--directory")
        self._require("repository", "Git repository", "-r/--repository")
        self._require("ssh_host", "SSH host", "-H/--host")
        self._require("branch", "Git branch", "-b/--branch")

        directory = self.deployment_directory.strip()
        if not directory.startswith("/"):
            raise ConfigurationError(
                f"Deployment directory must be an absolute path, got '{directory}'"
            )
        object.__setattr__(self, "deployment_directory", directory.rstrip("/") or "/")

        if isinstance(self.keep_releases, bool) or not isinstance(self.keep_releases, int):
            raise ConfigurationError(
                f"Number of releases to keep must be an integer, got '{self.keep_releases}'",
                context="Use the option '-k/--keep'",
            )
        if self.keep_releases < 1:
            raise ConfigurationError(
                f"Number of releases to keep must be at least 1, got {self.keep_releases}",
                context="Use the option '-k/--keep'",
            )

        frameworks: Dict[str, Optional[str]] = {}
        for name, option in dict(self.frameworks).items():
            key = name.strip().lower()
            if not key:
                raise ConfigurationError("Framework name must not be empty")
            value = option.strip() if isinstance(option, str) else option
            if value in (None, ""):
                value = FRAMEWORK_DEFAULT_OPTIONS.get(key)
            frameworks[key] = value
        object.__setattr__(self, "frameworks", MappingProxyType(frameworks))

        shared: List[str] = []
        for path in self.shared_paths:
            normalized = normalize_shared_path(path)
            if normalized not in shared:
                shared.append(normalized)
        object.__setattr__(self, "shared_paths", tuple(shared))

        if self.ssh_port is not None and not 0 < self.ssh_port < 65536:
            raise ConfigurationError(f"Invalid SSH port: {self.ssh_port}")

    def _require(self, field_name: str, label: str, option: str) -> None:
        value = getattr(self, field_name)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(
                f"{label} not specified", context=f"Use the option '{option}'"
            )
        object.__setattr__(self, field_name, value.strip())

    @property
    def enabled_frameworks(self) -> List[str]:
        """Known frameworks present in the configuration, in pipeline order."""
        return [name for name in KNOWN_FRAMEWORKS if name in self.frameworks]

    @property
    def unknown_frameworks(self) -> List[str]:
        """Framework keys that produce no step."""
        return [name for name in self.frameworks if name not in KNOWN_FRAMEWORKS]

    def has_framework(self, name: str) -> bool:
        return name in self.frameworks

    def framework_option(self, name: str) -> Optional[str]:
        return self.frameworks.get(name)

    def with_mode(self, mode: DeploymentMode) -> "Configuration":
        """Return a copy of this configuration running in another mode."""
        return replace(self, mode=mode, frameworks=dict(self.frameworks))

    def describe(self) -> Dict[str, str]:
        """Settings as display strings, for headers and the log file."""
        frameworks = ", ".join(
            f"{name}:{option}" if option else name
            for name, option in self.frameworks.items()
        )
        return {
            "Mode": self.mode.value,
            "Directory": self.deployment_directory,
            "Repository": self.repository,
            "Branch": self.branch,
            "Host": self.ssh_host,
            "Keep releases": str(self.keep_releases),
            "Frameworks": frameworks or "-",
            "Shared paths": ", ".join(self.shared_paths) or "-",
        }
