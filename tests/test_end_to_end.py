"""
Deploy and rollback against a real directory tree.

The local shell stands in for the SSH host and a throwaway git repository
stands in for the remote one.
"""

import os
import shutil
import subprocess
import sys
from datetime import datetime, timedelta, timezone

import pytest

from gitship.core.pipeline import StepPipeline
from gitship.core.publish import PublishProtocol
from gitship.exceptions import PublishGuardError, RemoteCommandError
from gitship.models.config import Configuration
from gitship.models.release import ReleaseLayout
from gitship.services.remote_executor import RemoteExecutor
from gitship.services.ssh_service import LocalShellService

pytestmark = pytest.mark.skipif(
    shutil.which("git") is None or shutil.which("bash") is None or sys.platform != "linux",
    reason="requires git, bash and GNU coreutils",
)

START = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


def git(*args, cwd):
    subprocess.run(
        [
            "git",
            "-c",
            "user.name=gitship",
            "-c",
            "user.email=gitship@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )


def head_of(repository):
    return subprocess.run(
        ["git", "rev-parse", "HEAD"],
        cwd=repository,
        check=True,
        stdout=subprocess.PIPE,
        text=True,
    ).stdout.strip()


@pytest.fixture
def origin(tmp_path):
    """A repository with one commit on branch main."""
    path = tmp_path / "origin"
    path.mkdir()
    git("init", "-q", cwd=path)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=path)
    (path / "app.py").write_text("print('hello')\n")
    (path / "db.sqlite3").write_text("checked-in database\n")
    git("add", ".", cwd=path)
    git("commit", "-q", "-m", "Initial commit", cwd=path)
    return path


@pytest.fixture
def root(tmp_path):
    return tmp_path / "srv" / "app"


@pytest.fixture
def local_executor(logger):
    return RemoteExecutor(LocalShellService(), logger)


@pytest.fixture
def config_for(origin, root):
    def factory(**overrides):
        settings = {
            "deployment_directory": str(root),
            "repository": f"file://{origin}",
            "ssh_host": "localhost",
            "branch": "main",
            "keep_releases": 2,
        }
        settings.update(overrides)
        return Configuration(**settings)

    return factory


def deploy(local_executor, logger, config, at=START):
    return StepPipeline(local_executor, logger, clock=lambda: at).run_deploy(config)


class TestDeploy:
    def test_first_deploy(self, local_executor, logger, config_for, origin, root):
        release = deploy(local_executor, logger, config_for())

        assert release.name == "20261017120000"
        assert os.listdir(root / "releases") == [release.name]
        assert os.readlink(root / "current") == release.path
        assert (root / "current" / "app.py").read_text() == "print('hello')\n"
        assert (root / "CURRENT_REVISION").read_text().strip() == head_of(origin)
        assert (root / "CURRENT_COMMIT").read_text().strip() == "Initial commit"
        assert (root / "releases" / release.name / "REVISION").read_text().strip() == (
            head_of(origin)
        )
        assert not (root / "current_tmp").exists()

    def test_retention_keeps_newest(self, local_executor, logger, config_for, root):
        releases = root / "releases"
        for name in ("20200101000000", "20200102000000", "20200103000000"):
            (releases / name).mkdir(parents=True)

        release = deploy(local_executor, logger, config_for(keep_releases=2))

        assert sorted(os.listdir(releases)) == ["20200103000000", release.name]
        assert os.readlink(root / "current") == release.path

    def test_consecutive_deploys(self, local_executor, logger, config_for, root):
        first = deploy(local_executor, logger, config_for())
        second = deploy(local_executor, logger, config_for(), at=START + timedelta(seconds=1))

        assert sorted(os.listdir(root / "releases")) == [first.name, second.name]
        assert os.readlink(root / "current") == second.path

    def test_shared_paths(self, local_executor, logger, config_for, root):
        shared = root / "shared"
        shared.mkdir(parents=True)
        (shared / "db.sqlite3").write_text("live data\n")

        release = deploy(
            local_executor,
            logger,
            config_for(shared_paths=["db.sqlite3", "media/uploads"], frameworks={"sqlite": None}),
        )

        release_dir = root / "releases" / release.name
        assert os.readlink(release_dir / "db.sqlite3") == str(shared / "db.sqlite3")
        assert (release_dir / "db.sqlite3").read_text() == "live data\n"
        assert (release_dir / "db.sqlite3.bak").read_text() == "live data\n"
        assert os.readlink(release_dir / "media" / "uploads") == str(shared / "media" / "uploads")
        assert (shared / "media").is_dir()

    def test_missing_database_is_only_a_warning(self, local_executor, logger, config_for, root):
        release = deploy(
            local_executor,
            logger,
            config_for(shared_paths=["db.sqlite3"], frameworks={"sqlite": None}),
        )

        assert not (root / "releases" / release.name / "db.sqlite3.bak").exists()
        assert "[WARNING] No existing database found." in logger.log_path.read_text()

    def test_missing_branch_aborts_before_publish(
        self, local_executor, logger, config_for, root
    ):
        with pytest.raises(RemoteCommandError) as exc_info:
            deploy(local_executor, logger, config_for(branch="does-not-exist"))

        assert "does-not-exist" in exc_info.value.diagnostic
        assert not os.path.lexists(root / "current")
        assert not os.path.lexists(root / "current_tmp")


class TestRollback:
    def test_rollback_to_previous(self, local_executor, logger, config_for, root):
        releases = root / "releases"
        for name in ("r1", "r2"):
            (releases / name).mkdir(parents=True)
        os.symlink(str(releases / "r2"), str(root / "current"))

        target = StepPipeline(local_executor, logger).run_rollback(config_for())

        assert target.name == "r1"
        assert os.readlink(root / "current") == str(releases / "r1")
        assert sorted(os.listdir(releases)) == ["r1", "r2"]
        assert not (root / "CURRENT_REVISION").exists()

    def test_deploy_then_rollback(self, local_executor, logger, config_for, root):
        first = deploy(local_executor, logger, config_for())
        deploy(local_executor, logger, config_for(), at=START + timedelta(minutes=5))

        target = StepPipeline(local_executor, logger).run_rollback(config_for())

        assert target == first
        assert os.readlink(root / "current") == first.path


class TestPublishGuard:
    def test_directory_in_the_way(self, local_executor, logger, root):
        current = root / "current"
        current.mkdir(parents=True)
        (current / "index.html").write_text("static site\n")
        layout = ReleaseLayout(str(root))

        with pytest.raises(PublishGuardError):
            PublishProtocol(local_executor, layout, logger).publish(layout.release("r1"))

        assert current.is_dir() and not current.is_symlink()
        assert (current / "index.html").read_text() == "static site\n"
