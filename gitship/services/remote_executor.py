"""Remote command execution with fail-fast error classification."""

from enum import Enum
from typing import Optional, Union

from gitship.core.commands import ShellCommand
from gitship.exceptions import RemoteCommandError
from gitship.logger import DeployLogger


class OutputMode(Enum):
    """How non-empty output of a successful command is surfaced."""

    LOG = "log"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class RemoteExecutor:
    """
    Runs one command at a time on the deployment host.

    The transport is any object with
    `execute_command(command, timeout=None) -> SSHResult`
    (`SSHService`, `LocalShellService`). A non-zero exit, or a transport
    failure, always raises `RemoteCommandError`; there are no retries.
    """

    def __init__(self, transport, logger: DeployLogger, timeout: Optional[int] = None):
        self.transport = transport
        self.logger = logger
        self.timeout = timeout

    def execute(
        self, command: Union[ShellCommand, str], mode: OutputMode = OutputMode.LOG
    ) -> str:
        """
        Execute a command and return its combined output.

        Args:
            command: Command line, already quoted by the caller
            mode: How to surface non-empty output on success

        Returns:
            Combined stdout and stderr, stripped

        Raises:
            RemoteCommandError: On non-zero exit, transport failure, or
                non-empty output in FATAL mode
        """
        text = str(command)
        self.logger.log_command(text)

        try:
            result = self.transport.execute_command(text, timeout=self.timeout)
        except OSError as e:
            # TimeoutError included
            self.logger.log_output(str(e), "stderr")
            raise RemoteCommandError(text, str(e)) from e

        output = result.output
        if result.is_failure:
            self.logger.log_output(output)
            raise RemoteCommandError(
                text, output or f"Remote command exited with status {result.returncode}"
            )

        self._surface(text, output, mode)
        return output

    def execute_with_warning(self, command: Union[ShellCommand, str]) -> str:
        return self.execute(command, OutputMode.WARNING)

    def _surface(self, command: str, output: str, mode: OutputMode) -> None:
        if not output:
            return

        if mode == OutputMode.INFO:
            self.logger.info(output)
        elif mode == OutputMode.WARNING:
            self.logger.warning(output)
        elif mode == OutputMode.ERROR:
            self.logger.error(output)
        elif mode == OutputMode.FATAL:
            raise RemoteCommandError(command, output)
        else:
            self.logger.log_output(output)
