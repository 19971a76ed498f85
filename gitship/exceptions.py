"""
gitship Exception Hierarchy

Every error kind is fatal to the pipeline run that raised it.
"""

from typing import Optional


class GitshipError(Exception):
    """Base exception for all gitship errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(GitshipError):
    """Raised when configuration is invalid or missing."""

    pass


class DeploymentError(GitshipError):
    """Raised when a deployment step fails."""

    pass


class RemoteCommandError(DeploymentError):
    """Raised when a remote command exits non-zero or cannot be run."""

    def __init__(self, command: str, diagnostic: str):
        self.command = command
        self.diagnostic = diagnostic
        message = "The following SSH command failed"
        context = f"Command: {command}\nError details: {diagnostic}"
        super().__init__(message, context)


class PublishGuardError(DeploymentError):
    """Raised when the live pointer exists but is not a symbolic link."""

    def __init__(self, current_path: str):
        self.current_path = current_path
        message = f"Refusing to publish: '{current_path}' is not a symbolic link"
        context = "Move the file or directory out of the way, then deploy again"
        super().__init__(message, context)


class RollbackUnavailableError(DeploymentError):
    """Raised when there is no release to roll back to."""

    pass


class HookError(DeploymentError):
    """Raised when a user hook fails with a non-gitship exception."""

    def __init__(self, hook_name: str, error: Exception):
        self.hook_name = hook_name
        self.error = error
        message = f"Hook '{hook_name}' failed"
        context = f"{type(error).__name__}: {error}"
        super().__init__(message, context)
