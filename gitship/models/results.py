"""
Result Models

Dataclass models for remote command results.
"""

from dataclasses import dataclass


@dataclass
class SSHResult:
    """Result of one remote command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    host: str = ""
    command: str = ""
    duration_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if the remote process exited zero."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if the remote process exited non-zero."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"SSHResult(host={self.host}, returncode={self.returncode}, duration={self.duration_seconds:.2f}s)"
