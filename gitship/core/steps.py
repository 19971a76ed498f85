"""
Pipeline building blocks: steps, the step registry and hooks.

A step is registered once under a unique name. The pipeline for a run is
the registered order filtered by each step's modes and precondition.
Hooks are looked up by step name in an explicit HookRegistry.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional

from gitship.logger import DeployLogger
from gitship.models.config import Configuration, DeploymentMode
from gitship.models.release import Release, ReleaseLayout

DEPLOY_ONLY = frozenset({DeploymentMode.DEPLOY})
ALL_MODES = frozenset(DeploymentMode)

HOOK_PHASES = ("pre", "post")


@dataclass
class DeployContext:
    """Everything a step body or hook needs for one run."""

    config: Configuration
    executor: Any  # RemoteExecutor
    logger: DeployLogger
    layout: ReleaseLayout
    release: Optional[Release] = None


def always(config: Configuration) -> bool:
    return True


@dataclass
class Step:
    """A named pipeline stage."""

    name: str
    description: str
    body: Callable[[DeployContext], None]
    precondition: Callable[[Configuration], bool] = always
    modes: FrozenSet[DeploymentMode] = DEPLOY_ONLY
    best_effort: bool = False

    def applies_to(self, config: Configuration) -> bool:
        return config.mode in self.modes and self.precondition(config)

    def __repr__(self) -> str:
        return f"Step(name={self.name})"


class StepRegistry:
    """Ordered registry of steps keyed by name."""

    def __init__(self):
        self._steps: Dict[str, Step] = {}

    def register(self, step: Step) -> Step:
        if step.name in self._steps:
            raise ValueError(f"Step '{step.name}' is already registered")
        self._steps[step.name] = step
        return step

    def get(self, name: str) -> Step:
        return self._steps[name]

    @property
    def names(self) -> List[str]:
        return list(self._steps)

    def __contains__(self, name: str) -> bool:
        return name in self._steps

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps.values())

    def __len__(self) -> int:
        return len(self._steps)


@dataclass
class Hook:
    """User callable run right before or after a step."""

    name: str
    callback: Callable[[DeployContext], Any]
    description: Optional[str] = None


@dataclass
class HookRegistry:
    """Explicit map: step name -> {phase: Hook}."""

    hooks: Dict[str, Dict[str, Hook]] = field(default_factory=dict)

    def register(
        self,
        phase: str,
        step_name: str,
        callback: Callable[[DeployContext], Any],
        description: Optional[str] = None,
    ) -> Hook:
        """
        Register a hook.

        Args:
            phase: "pre" or "post"
            step_name: Step the hook surrounds
            callback: Called with the DeployContext
            description: Human-readable text shown when the hook runs
        """
        if phase not in HOOK_PHASES:
            raise ValueError(f"Invalid hook phase '{phase}', expected one of {HOOK_PHASES}")
        hook = Hook(name=f"{phase}_{step_name}", callback=callback, description=description)
        self.hooks.setdefault(step_name, {})[phase] = hook
        return hook

    def get(self, phase: str, step_name: str) -> Optional[Hook]:
        return self.hooks.get(step_name, {}).get(phase)

    @property
    def names(self) -> List[str]:
        return [hook.name for phases in self.hooks.values() for hook in phases.values()]

    def __len__(self) -> int:
        return len(self.names)
