"""
Framework steps.

Each runs inside the release directory and only when its framework is
present in the configuration. Pipeline order: npm, sqlite, python, django.
"""

import posixpath
from typing import Callable

from gitship.constants import VENV_DIR
from gitship.core.commands import ShellCommand
from gitship.core.steps import DeployContext
from gitship.models.config import Configuration
from gitship.utils import split_words

DJANGO_FLAGS = ("static",)


def framework_enabled(name: str) -> Callable[[Configuration], bool]:
    """Precondition: the framework key is present in the configuration."""

    def precondition(config: Configuration) -> bool:
        return config.has_framework(name)

    precondition.__name__ = f"{name}_enabled"
    return precondition


def in_virtualenv(release_path: str, command: ShellCommand) -> ShellCommand:
    return (
        ShellCommand.of("source", posixpath.join(VENV_DIR, "bin", "activate"))
        .and_then(command)
        .in_directory(release_path)
    )


def run_npm_tasks(context: DeployContext) -> None:
    option = context.config.framework_option("npm") or "/"
    subdirectory = option.strip("/")
    workdir = context.release.path
    if subdirectory:
        workdir = posixpath.normpath(posixpath.join(workdir, subdirectory))

    context.logger.info(f"Installing npm dependencies in {workdir}")
    context.executor.execute(ShellCommand.of("npm", "install").in_directory(workdir))
    context.logger.info("Building assets")
    context.executor.execute(
        ShellCommand.of("npm", "run", "build", "--if-present").in_directory(workdir)
    )


def backup_sqlite_database(context: DeployContext) -> None:
    """Copy the database to `<file>.bak` before migrations touch it."""
    database = context.config.framework_option("sqlite") or "db.sqlite3"
    release_path = context.release.path

    context.logger.info(f"Backing up database {database}")
    context.executor.execute_with_warning(
        ShellCommand.format(
            "if [ ! -f {} ]; then echo {}; fi", database, "No existing database found."
        )
        .in_directory(release_path)
    )
    context.executor.execute(
        ShellCommand.format("if [ -f {0} ]; then cp {0} {1}; fi", database, f"{database}.bak")
        .in_directory(release_path)
    )


def run_python_tasks(context: DeployContext) -> None:
    requirements = context.config.framework_option("python") or "requirements.txt"
    release_path = context.release.path
    executor = context.executor

    context.logger.info("Creating virtual environment")
    executor.execute(
        ShellCommand.of("python3", "-m", "venv", VENV_DIR).in_directory(release_path)
    )
    executor.execute(
        in_virtualenv(release_path, ShellCommand.of("pip", "install", "--upgrade", "pip"))
    )
    context.logger.info(f"Installing dependencies from {requirements}")
    executor.execute(
        in_virtualenv(release_path, ShellCommand.of("pip", "install", "-r", requirements))
    )


def run_django_tasks(context: DeployContext) -> None:
    flags = split_words(context.config.framework_option("django"))
    release_path = context.release.path
    executor = context.executor

    for flag in flags:
        if flag not in DJANGO_FLAGS:
            context.logger.warning(f"Ignoring unknown django option '{flag}'")

    context.logger.info("Running Django migrations")
    executor.execute(
        in_virtualenv(
            release_path, ShellCommand.of("python", "manage.py", "migrate", "--noinput")
        )
    )

    if "static" in flags:
        context.logger.info("Collecting static files")
        executor.execute(
            in_virtualenv(
                release_path,
                ShellCommand.of("python", "manage.py", "collectstatic", "--noinput"),
            )
        )
