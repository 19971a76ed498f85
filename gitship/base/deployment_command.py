"""
Deployment Command Base Class

Base class for commands that act on one deployment directory.
Provides configuration resolution and service wiring.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from .base_command import BaseCommand
from gitship.core.pipeline import STEP_NAMES, StepPipeline
from gitship.models.config import Configuration, DeploymentMode
from gitship.models.ssh import SSHConfig
from gitship.services import ConfigService, HookService, RemoteExecutor, SSHService


def create_transport(config: Configuration) -> SSHService:
    """Transport used to reach the deployment host."""
    return SSHService(
        SSHConfig(host=config.ssh_host, key_path=config.ssh_key, port=config.ssh_port)
    )


class DeploymentCommand(BaseCommand):
    """
    Base class for deploy, rollback and releases.

    Provides:
    - Configuration from file + command-line overrides
    - RemoteExecutor bound to the configured host
    - StepPipeline with user hooks
    """

    mode = DeploymentMode.DEPLOY

    def __init__(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        config_path: Optional[Path] = None,
        hooks_path: Optional[Path] = None,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
    ):
        super().__init__(verbose=verbose, log_dir=log_dir)
        self.overrides = overrides or {}
        self.config_path = config_path
        self.hooks_path = hooks_path
        self.config_service = ConfigService()
        self.hook_service = HookService()

    def load_configuration(self) -> Configuration:
        """
        Resolve the configuration for this command.

        Raises:
            ConfigurationError: If a required setting is missing or invalid
        """
        return self.config_service.build(self.overrides, self.config_path, mode=self.mode)

    def create_executor(self, config: Configuration) -> RemoteExecutor:
        return RemoteExecutor(
            create_transport(config), self.logger, timeout=config.command_timeout
        )

    def create_pipeline(self, config: Configuration) -> StepPipeline:
        hooks = self.hook_service.load(self.hooks_path, STEP_NAMES)
        if len(hooks):
            self.logger.debug(f"Loaded hooks: {', '.join(hooks.names)}")
        return StepPipeline(self.create_executor(config), self.logger, hooks=hooks)
