"""
SSH Configuration Models

Dataclass models for SSH operations.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gitship.constants import SSH_CONNECTION_TIMEOUT


@dataclass
class SSHConfig:
    """SSH settings for reaching the deployment host."""

    host: str
    key_path: Optional[str] = None
    port: Optional[int] = None
    connect_timeout: int = SSH_CONNECTION_TIMEOUT

    @property
    def key_path_expanded(self) -> Optional[Path]:
        """Get expanded key path (resolves ~)."""
        if self.key_path:
            return Path(self.key_path).expanduser()
        return None

    @property
    def ssh_command_prefix(self) -> list[str]:
        """Get SSH command prefix for subprocess."""
        prefix = ["ssh", "-o", "BatchMode=yes", "-o", f"ConnectTimeout={self.connect_timeout}"]
        if self.key_path_expanded:
            prefix.extend(["-i", str(self.key_path_expanded)])
        if self.port:
            prefix.extend(["-p", str(self.port)])
        prefix.append(self.host)
        return prefix

    def __repr__(self) -> str:
        return f"SSHConfig(host={self.host}, key={self.key_path})"
