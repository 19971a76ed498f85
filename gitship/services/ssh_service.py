"""SSH service for executing commands on the deployment host."""

import shlex
import subprocess
import time
from typing import Optional

from gitship.models.results import SSHResult
from gitship.models.ssh import SSHConfig


class SSHService:
    """Runs shell commands on a remote host through the `ssh` client."""

    def __init__(self, config: SSHConfig):
        """
        Initialize SSH service.

        Args:
            config: SSH configuration
        """
        self.config = config

    @property
    def host(self) -> str:
        return self.config.host

    def build_command(self, command: str) -> list[str]:
        """Build the ssh argv running `command` under bash on the host."""
        return self.config.ssh_command_prefix + [f"bash -c {shlex.quote(command)}"]

    def execute_command(self, command: str, timeout: Optional[int] = None) -> SSHResult:
        """
        Execute command on remote host via SSH.

        Args:
            command: Command to execute
            timeout: Command timeout in seconds (None waits forever)

        Returns:
            SSHResult with execution details, stderr merged into stdout

        Raises:
            TimeoutError: If the command outlives `timeout`
            OSError: If the ssh client cannot be started
        """
        return _run(self.build_command(command), self.host, command, timeout)


class LocalShellService:
    """Runs shell commands on this machine, for same-host deployments."""

    host = "localhost"

    def build_command(self, command: str) -> list[str]:
        return ["bash", "-c", command]

    def execute_command(self, command: str, timeout: Optional[int] = None) -> SSHResult:
        """Execute command with the local bash."""
        return _run(self.build_command(command), self.host, command, timeout)


def _run(argv: list[str], host: str, command: str, timeout: Optional[int]) -> SSHResult:
    start_time = time.time()

    try:
        result = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise TimeoutError(
            f"Command timed out after {timeout}s\nContext: Host: {host}, Command: {command}"
        )

    return SSHResult(
        returncode=result.returncode,
        stdout=result.stdout or "",
        host=host,
        command=command,
        duration_seconds=time.time() - start_time,
    )
