"""
Release lifecycle pipeline.

Deploy: fetch -> shared_paths -> npm -> sqlite -> python -> django ->
publish -> cleanup -> summary, each step only when its precondition holds.
Rollback: resolve the previous release, then publish -> summary.

Execution is strictly sequential and fail-fast: the first error stops the
run, is written to the log as fatal and propagates to the caller. Nothing
is rolled back automatically.
"""

from datetime import datetime
from typing import Callable, List, Optional

from gitship.core.checkout import fetch_repository, link_shared_paths
from gitship.core.frameworks import (
    backup_sqlite_database,
    framework_enabled,
    run_django_tasks,
    run_npm_tasks,
    run_python_tasks,
)
from gitship.core.publish import publish_release
from gitship.core.retention import clean_old_releases
from gitship.core.rollback import RollbackResolver
from gitship.core.steps import (
    ALL_MODES,
    DeployContext,
    HookRegistry,
    Step,
    StepRegistry,
)
from gitship.core.summary import summarize
from gitship.exceptions import GitshipError, HookError
from gitship.logger import DeployLogger
from gitship.models.config import Configuration, DeploymentMode
from gitship.models.release import Release, ReleaseLayout
from gitship.utils import new_release_name


def has_shared_paths(config: Configuration) -> bool:
    return bool(config.shared_paths)


def default_registry() -> StepRegistry:
    """The standard step sequence, in execution order."""
    registry = StepRegistry()
    registry.register(Step("fetch", "Fetching repository", fetch_repository))
    registry.register(
        Step("shared_paths", "Linking shared paths", link_shared_paths, has_shared_paths)
    )
    registry.register(
        Step("npm", "Running npm tasks", run_npm_tasks, framework_enabled("npm"))
    )
    registry.register(
        Step("sqlite", "Backing up database", backup_sqlite_database, framework_enabled("sqlite"))
    )
    registry.register(
        Step("python", "Running Python tasks", run_python_tasks, framework_enabled("python"))
    )
    registry.register(
        Step("django", "Running Django tasks", run_django_tasks, framework_enabled("django"))
    )
    registry.register(
        Step("publish", "Publishing release", publish_release, modes=ALL_MODES)
    )
    registry.register(Step("cleanup", "Cleaning old releases", clean_old_releases))
    registry.register(
        Step("summary", "Summary", summarize, modes=ALL_MODES, best_effort=True)
    )
    return registry


STEP_NAMES = default_registry().names


class StepPipeline:
    """Assembles and drives the steps of one deploy or rollback."""

    def __init__(
        self,
        executor,
        logger: DeployLogger,
        registry: Optional[StepRegistry] = None,
        hooks: Optional[HookRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            executor: RemoteExecutor bound to the deployment host
            logger: Run logger
            registry: Step registry (default: the standard sequence)
            hooks: Pre/post hooks keyed by step name
            clock: Returns the deploy start time, used for the release name
        """
        self.executor = executor
        self.logger = logger
        self.registry = registry or default_registry()
        self.hooks = hooks or HookRegistry()
        self.clock = clock

    def assemble(self, config: Configuration) -> List[Step]:
        """Registered steps that apply to this configuration, in order."""
        return [step for step in self.registry if step.applies_to(config)]

    def run_deploy(self, config: Configuration) -> Release:
        """
        Deploy a new release and publish it.

        Returns:
            The release that is now live
        """
        if config.mode != DeploymentMode.DEPLOY:
            config = config.with_mode(DeploymentMode.DEPLOY)

        layout = ReleaseLayout(config.deployment_directory)
        now = self.clock() if self.clock else None
        release = layout.release(new_release_name(now))

        self.logger.debug(f"Options: {config.describe()}")
        for name in config.unknown_frameworks:
            self.logger.warning(f"Framework '{name}' is not supported, ignoring it")

        context = DeployContext(config, self.executor, self.logger, layout, release)
        try:
            self._run(self.assemble(config), context)
        except GitshipError as e:
            self._report_failure(e)
            raise
        return release

    def run_rollback(self, config: Configuration) -> Release:
        """
        Republish the release preceding the current one.

        Returns:
            The release that is now live
        """
        if config.mode != DeploymentMode.ROLLBACK:
            config = config.with_mode(DeploymentMode.ROLLBACK)

        layout = ReleaseLayout(config.deployment_directory)
        self.logger.debug(f"Options: {config.describe()}")

        try:
            self.logger.step("Resolving previous release")
            target = RollbackResolver(self.executor, layout, self.logger).resolve()

            context = DeployContext(config, self.executor, self.logger, layout, target)
            self._run(self.assemble(config), context)
        except GitshipError as e:
            self._report_failure(e)
            raise
        return target

    def _report_failure(self, error: GitshipError) -> None:
        self.logger.log_error(error.message, context=error.context)

    def _run(self, steps: List[Step], context: DeployContext) -> None:
        for step in steps:
            self._run_step(step, context)

    def _run_step(self, step: Step, context: DeployContext) -> None:
        self.logger.step(step.description)
        self._invoke_hook("pre", step, context)

        try:
            step.body(context)
        except GitshipError as e:
            if not step.best_effort:
                raise
            self.logger.warning(f"Step '{step.name}' failed: {e.message}")
            if e.context:
                self.logger.debug(e.context)

        self._invoke_hook("post", step, context)

    def _invoke_hook(self, phase: str, step: Step, context: DeployContext) -> None:
        hook = self.hooks.get(phase, step.name)
        if hook is None:
            return

        self.logger.info(hook.description or f"Running hook {hook.name}")
        try:
            hook.callback(context)
        except GitshipError:
            raise
        except Exception as e:
            raise HookError(hook.name, e) from e
