"""
gitship Core

Release lifecycle: command building, steps, publish, retention, rollback.
"""

from .commands import ShellCommand, quote
from .pipeline import STEP_NAMES, StepPipeline, default_registry
from .publish import PublishProtocol
from .retention import RetentionCleaner, select_expired
from .rollback import RollbackResolver, previous_release
from .steps import DeployContext, Hook, HookRegistry, Step, StepRegistry

__all__ = [
    "ShellCommand",
    "quote",
    "STEP_NAMES",
    "StepPipeline",
    "default_registry",
    "PublishProtocol",
    "RetentionCleaner",
    "select_expired",
    "RollbackResolver",
    "previous_release",
    "DeployContext",
    "Hook",
    "HookRegistry",
    "Step",
    "StepRegistry",
]
