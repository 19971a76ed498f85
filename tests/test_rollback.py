"""Tests for rollback target resolution."""

import pytest

from gitship.core.rollback import RollbackResolver, previous_release
from gitship.exceptions import DeploymentError, RollbackUnavailableError
from gitship.models.release import ReleaseLayout

PROBE = "then echo symlink"


class TestPreviousRelease:
    def test_previous_in_name_order(self):
        names = ["r3", "r1", "r2"]

        assert previous_release("/srv/app/releases/r3", names) == "r2"
        assert previous_release("/srv/app/releases/r2", names) == "r1"

    def test_relative_link_target(self):
        assert previous_release("releases/r2", ["r1", "r2"]) == "r1"

    def test_oldest_release_has_no_previous(self):
        with pytest.raises(RollbackUnavailableError, match="No previous release"):
            previous_release("/srv/app/releases/r1", ["r1", "r2"])

    def test_current_not_listed(self):
        with pytest.raises(RollbackUnavailableError, match="not found"):
            previous_release("/srv/app/releases/r9", ["r1", "r2"])

    def test_rollback_after_rollback_goes_further_back(self):
        names = ["r1", "r2", "r3"]

        first = previous_release("/srv/app/releases/r3", names)
        second = previous_release(f"/srv/app/releases/{first}", names)

        assert (first, second) == ("r2", "r1")


class TestRollbackResolver:
    def resolver(self, executor, logger):
        return RollbackResolver(executor, ReleaseLayout("/srv/app"), logger)

    def test_resolves_previous_release(self, executor, transport, logger):
        transport.on(PROBE, "symlink")
        transport.on("readlink", "/srv/app/releases/r2\n")
        transport.on("ls -1A", "r1\nr2\n")

        release = self.resolver(executor, logger).resolve()

        assert release.name == "r1"
        assert release.path == "/srv/app/releases/r1"

    def test_nothing_published(self, executor, transport, logger):
        transport.on(PROBE, "missing")

        with pytest.raises(RollbackUnavailableError, match="No current release"):
            self.resolver(executor, logger).resolve()
        assert not transport.ran("readlink")

    def test_current_is_a_directory(self, executor, transport, logger):
        transport.on(PROBE, "other")

        with pytest.raises(RollbackUnavailableError):
            self.resolver(executor, logger).resolve()

    def test_login_banner_before_probe_answer(self, executor, transport, logger):
        transport.on(PROBE, "Welcome to web1\nsymlink")
        transport.on("readlink", "/srv/app/releases/r2")
        transport.on("ls -1A", "r1\nr2")

        assert self.resolver(executor, logger).resolve().name == "r1"

    def test_unexpected_probe_answer(self, executor, transport, logger):
        transport.on(PROBE, "")

        with pytest.raises(DeploymentError, match="Unexpected answer"):
            self.resolver(executor, logger).resolve()
