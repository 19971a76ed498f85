"""
Config Service

Resolves the Configuration for one invocation from defaults, a
configuration file and command-line overrides (highest precedence).
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values

from gitship.constants import YAML_CONFIG_SUFFIXES
from gitship.exceptions import ConfigurationError
from gitship.models.config import Configuration, DeploymentMode
from gitship.utils import find_config_file, parse_framework_specs, split_words

# `.deploy-configuration` keys -> Configuration fields
ENV_FILE_KEYS = {
    "DEPLOYMENT_DIRECTORY": "deployment_directory",
    "GIT_REPOSITORY": "repository",
    "GIT_BRANCH": "branch",
    "SSH_HOST": "ssh_host",
    "KEEP_RELEASES": "keep_releases",
    "FRAMEWORKS": "frameworks",
    "SHARED_PATHS": "shared_paths",
    "SSH_KEY": "ssh_key",
    "SSH_PORT": "ssh_port",
    "COMMAND_TIMEOUT": "command_timeout",
}

CONFIG_FIELDS = set(ENV_FILE_KEYS.values())
INTEGER_FIELDS = ("keep_releases", "ssh_port", "command_timeout")


class ConfigService:
    """Service for loading and merging gitship configuration."""

    def __init__(self, working_directory: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            working_directory: Where configuration files are searched (default: cwd)
        """
        self.working_directory = working_directory or Path.cwd()

    def find_config_file(self) -> Optional[Path]:
        return find_config_file(self.working_directory)

    def load_file(self, path: Optional[Path] = None) -> Dict[str, Any]:
        """
        Load settings from a configuration file.

        Args:
            path: Explicit file; when None the working directory is searched

        Returns:
            Settings keyed by Configuration field name (empty if no file)

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        if path is None:
            path = self.find_config_file()
            if path is None:
                return {}
        path = Path(path)

        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")

        if path.suffix in YAML_CONFIG_SUFFIXES:
            raw = self._load_yaml_file(path)
        else:
            raw = self._load_env_file(path)

        return self._normalize(raw, source=str(path))

    def _load_env_file(self, path: Path) -> Dict[str, Any]:
        values = dotenv_values(path)
        return {
            ENV_FILE_KEYS[key]: value
            for key, value in values.items()
            if key in ENV_FILE_KEYS and value not in (None, "")
        }

    def _load_yaml_file(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}", context=str(e))

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid configuration file {path}: expected a mapping of settings"
            )

        unknown = sorted(set(data) - CONFIG_FIELDS)
        if unknown:
            raise ConfigurationError(
                f"Unknown settings in {path}: {', '.join(unknown)}",
                context=f"Allowed settings: {', '.join(sorted(CONFIG_FIELDS))}",
            )
        return {key: value for key, value in data.items() if value is not None}

    def _normalize(self, raw: Dict[str, Any], source: str) -> Dict[str, Any]:
        settings = dict(raw)

        for key in INTEGER_FIELDS:
            if key in settings:
                settings[key] = to_int(settings[key], key, source)

        if "frameworks" in settings:
            settings["frameworks"] = to_frameworks(settings["frameworks"], source)

        if "shared_paths" in settings:
            settings["shared_paths"] = to_paths(settings["shared_paths"], source)

        for key in ("deployment_directory", "repository", "branch", "ssh_host", "ssh_key"):
            if key in settings:
                settings[key] = str(settings[key])

        return settings

    def build(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        config_path: Optional[Path] = None,
        mode: DeploymentMode = DeploymentMode.DEPLOY,
    ) -> Configuration:
        """
        Build the resolved Configuration.

        Args:
            overrides: Command-line values keyed by field name; None means unset
            config_path: Explicit configuration file
            mode: Deploy or rollback

        Raises:
            ConfigurationError: If a required setting is missing or invalid
        """
        settings = self.load_file(config_path)

        for key, value in (overrides or {}).items():
            if value is None or value == () or value == []:
                continue
            if key == "frameworks":
                merged = dict(settings.get("frameworks", {}))
                merged.update(value)
                settings["frameworks"] = merged
            else:
                settings[key] = value

        return Configuration(
            deployment_directory=settings.pop("deployment_directory", None),
            repository=settings.pop("repository", None),
            ssh_host=settings.pop("ssh_host", None),
            mode=mode,
            **settings,
        )


def to_int(value: Any, key: str, source: str = "configuration") -> int:
    """Convert a setting to int, rejecting booleans and non-numeric text."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {key} in {source}: '{value}' is not an integer")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        raise ConfigurationError(f"Invalid {key} in {source}: '{text}' is not an integer")


def to_frameworks(value: Any, source: str = "configuration") -> Dict[str, Optional[str]]:
    """Accept a mapping, a list of `name[:option]` or a separated string."""
    if isinstance(value, dict):
        return {
            str(name): None if option is None else str(option)
            for name, option in value.items()
        }
    if isinstance(value, str):
        return parse_framework_specs(split_words(value))
    if isinstance(value, list):
        return parse_framework_specs(str(item) for item in value)
    raise ConfigurationError(f"Invalid frameworks in {source}: {value!r}")


def to_paths(value: Any, source: str = "configuration") -> list:
    if isinstance(value, str):
        return split_words(value)
    if isinstance(value, list):
        return [str(item) for item in value]
    raise ConfigurationError(f"Invalid shared_paths in {source}: {value!r}")
