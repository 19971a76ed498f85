"""Shared fixtures for the gitship test suite."""

import io
from datetime import datetime, timezone

import pytest
from rich.console import Console

from gitship.logger import DeployLogger
from gitship.models.config import Configuration
from gitship.models.results import SSHResult
from gitship.services.remote_executor import RemoteExecutor

RELEASE_NAME = "20261017120000"
RELEASE_PATH = f"/srv/app/releases/{RELEASE_NAME}"


class FakeTransport:
    """
    Records commands and answers them from scripted rules.

    A rule matches when its fragment occurs in the command; the most
    recently added matching rule wins. Unmatched commands succeed silently.
    """

    host = "fake"

    def __init__(self):
        self.commands = []
        self.rules = []

    def on(self, fragment, output="", returncode=0):
        self.rules.append((fragment, output, returncode))
        return self

    def raise_on(self, fragment, error):
        self.rules.append((fragment, error, None))
        return self

    def execute_command(self, command, timeout=None):
        self.commands.append(command)
        for fragment, output, returncode in reversed(self.rules):
            if fragment in command:
                if isinstance(output, Exception):
                    raise output
                return SSHResult(
                    returncode=returncode, stdout=output, host=self.host, command=command
                )
        return SSHResult(returncode=0, host=self.host, command=command)

    def ran(self, fragment):
        return any(fragment in command for command in self.commands)

    def index_of(self, fragment):
        for index, command in enumerate(self.commands):
            if fragment in command:
                return index
        raise AssertionError(f"No command containing {fragment!r} in {self.commands}")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def quiet_console():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def logger(tmp_path, quiet_console):
    deploy_logger = DeployLogger("test", log_dir=tmp_path / "logs", ui_console=quiet_console)
    yield deploy_logger
    deploy_logger.close()


@pytest.fixture
def executor(transport, logger):
    return RemoteExecutor(transport, logger)


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_config():
    def factory(**overrides):
        settings = {
            "deployment_directory": "/srv/app",
            "repository": "git@x:y.git",
            "ssh_host": "web1",
            "branch": "main",
            "keep_releases": 2,
        }
        settings.update(overrides)
        return Configuration(**settings)

    return factory


def read_log(logger):
    return logger.log_path.read_text()
