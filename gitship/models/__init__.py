"""
gitship Domain Models

Dataclass-based models for configuration, releases and command results.
"""

from .config import (
    Configuration,
    DeploymentMode,
    normalize_shared_path,
)
from .release import (
    Release,
    ReleaseLayout,
)
from .results import SSHResult
from .ssh import SSHConfig

__all__ = [
    # Configuration
    "Configuration",
    "DeploymentMode",
    "normalize_shared_path",
    # Releases
    "Release",
    "ReleaseLayout",
    # Results
    "SSHResult",
    # SSH
    "SSHConfig",
]
