"""
Hook Service

Loads user hooks from a Python file. Every top-level function named
`pre_<step>` or `post_<step>` is registered for that step; an optional
`HOOK_DESCRIPTIONS` dict maps hook names to the text shown when they run.

Example `.deploy-hooks.py`:

    from gitship.core import ShellCommand

    HOOK_DESCRIPTIONS = {"post_publish": "Restarting application server"}

    def post_publish(context):
        context.executor.execute(ShellCommand.of("sudo", "systemctl", "restart", "myapp"))
"""

import importlib.util
import inspect
import re
from pathlib import Path
from typing import Iterable, Optional

from gitship.constants import DEFAULT_HOOKS_FILE
from gitship.core.steps import HookRegistry
from gitship.exceptions import ConfigurationError

HOOK_NAME = re.compile(r"(pre|post)_(\w+)")


class HookService:
    """Service for loading hook extension files."""

    def __init__(self, working_directory: Optional[Path] = None):
        self.working_directory = working_directory or Path.cwd()

    def find_hooks_file(self) -> Optional[Path]:
        path = self.working_directory / DEFAULT_HOOKS_FILE
        return path if path.is_file() else None

    def load(self, path: Optional[Path], known_steps: Iterable[str]) -> HookRegistry:
        """
        Load hooks into a registry.

        Args:
            path: Hooks file; when None the default file is used if present
            known_steps: Step names hooks may attach to

        Returns:
            HookRegistry (empty when there is no hooks file)

        Raises:
            ConfigurationError: If the file cannot be imported or names an unknown step
        """
        registry = HookRegistry()

        if path is None:
            path = self.find_hooks_file()
            if path is None:
                return registry
        path = Path(path)

        if not path.is_file():
            raise ConfigurationError(f"Hooks file not found: {path}")

        module = self._import(path)
        known = set(known_steps)

        descriptions = getattr(module, "HOOK_DESCRIPTIONS", {})
        if not isinstance(descriptions, dict):
            raise ConfigurationError(
                f"HOOK_DESCRIPTIONS in {path} must be a dict of hook name -> description"
            )

        for name, value in vars(module).items():
            match = HOOK_NAME.fullmatch(name)
            if not match or not inspect.isfunction(value):
                continue
            if value.__module__ != module.__name__:
                # Imported helper, not a hook
                continue

            phase, step_name = match.groups()
            if step_name not in known:
                raise ConfigurationError(
                    f"Hook '{name}' in {path} refers to unknown step '{step_name}'",
                    context=f"Known steps: {', '.join(sorted(known))}",
                )
            registry.register(phase, step_name, value, descriptions.get(name))

        return registry

    def _import(self, path: Path):
        spec = importlib.util.spec_from_file_location("gitship_user_hooks", path)
        if spec is None or spec.loader is None:
            raise ConfigurationError(f"Cannot load hooks file: {path}")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load hooks from {path}", context=f"{type(e).__name__}: {e}"
            ) from e
        return module
