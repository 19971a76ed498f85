"""
gitship Services Layer

Transports, remote execution, configuration and hook loading.
"""

from .config_service import ConfigService
from .hook_service import HookService
from .remote_executor import OutputMode, RemoteExecutor
from .ssh_service import LocalShellService, SSHService

__all__ = [
    "ConfigService",
    "HookService",
    "OutputMode",
    "RemoteExecutor",
    "LocalShellService",
    "SSHService",
]
