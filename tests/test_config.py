"""Tests for the Configuration model and ConfigService."""

import dataclasses

import pytest

from gitship.exceptions import ConfigurationError
from gitship.models.config import Configuration, DeploymentMode, normalize_shared_path
from gitship.services.config_service import ConfigService, to_frameworks, to_int


class TestConfiguration:
    def test_defaults(self, make_config):
        config = Configuration(
            deployment_directory="/srv/app", repository="git@x:y.git", ssh_host="web1"
        )

        assert config.branch == "master"
        assert config.keep_releases == 3
        assert config.mode == DeploymentMode.DEPLOY
        assert dict(config.frameworks) == {}
        assert config.shared_paths == ()

    @pytest.mark.parametrize(
        "missing, option",
        [
            ("deployment_directory", "-d/--directory"),
            ("repository", "-r/--repository"),
            ("ssh_host", "-H/--host"),
        ],
    )
    def test_required_settings(self, make_config, missing, option):
        with pytest.raises(ConfigurationError) as exc_info:
            make_config(**{missing: None})

        assert option in exc_info.value.context

    def test_blank_setting_counts_as_missing(self, make_config):
        with pytest.raises(ConfigurationError):
            make_config(ssh_host="   ")

    def test_directory_must_be_absolute(self, make_config):
        with pytest.raises(ConfigurationError):
            make_config(deployment_directory="srv/app")

    def test_trailing_slash_is_stripped(self, make_config):
        assert make_config(deployment_directory="/srv/app/").deployment_directory == "/srv/app"

    @pytest.mark.parametrize("keep", [0, -1, "3", True, 2.5])
    def test_invalid_keep(self, make_config, keep):
        with pytest.raises(ConfigurationError):
            make_config(keep_releases=keep)

    def test_framework_default_options(self, make_config):
        config = make_config(
            frameworks={"npm": None, "sqlite": "", "python": None, "django": None}
        )

        assert config.framework_option("npm") == "/"
        assert config.framework_option("sqlite") == "db.sqlite3"
        assert config.framework_option("python") == "requirements.txt"
        assert config.framework_option("django") is None

    def test_framework_names_are_lowercased(self, make_config):
        config = make_config(frameworks={"Django": "static"})

        assert config.has_framework("django")
        assert config.framework_option("django") == "static"

    def test_enabled_frameworks_follow_pipeline_order(self, make_config):
        config = make_config(frameworks={"django": None, "python": None, "npm": None})

        assert config.enabled_frameworks == ["npm", "python", "django"]

    def test_unknown_framework_is_accepted(self, make_config):
        config = make_config(frameworks={"rails": None})

        assert config.unknown_frameworks == ["rails"]
        assert config.enabled_frameworks == []

    def test_shared_paths_are_normalized_and_deduplicated(self, make_config):
        config = make_config(shared_paths=["media/uploads/", "db.sqlite3", "./db.sqlite3"])

        assert config.shared_paths == ("media/uploads", "db.sqlite3")

    @pytest.mark.parametrize("path", ["", "/etc/passwd", "..", "../outside", "a/../..", "."])
    def test_invalid_shared_path(self, path):
        with pytest.raises(ConfigurationError):
            normalize_shared_path(path)

    def test_configuration_is_immutable(self, make_config):
        config = make_config(frameworks={"python": None})

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.branch = "other"
        with pytest.raises(TypeError):
            config.frameworks["npm"] = None

    def test_invalid_port(self, make_config):
        with pytest.raises(ConfigurationError):
            make_config(ssh_port=70000)

    def test_with_mode(self, make_config):
        config = make_config(frameworks={"django": "static"}, shared_paths=["media"])
        rollback = config.with_mode(DeploymentMode.ROLLBACK)

        assert rollback.mode == DeploymentMode.ROLLBACK
        assert dict(rollback.frameworks) == {"django": "static"}
        assert rollback.shared_paths == ("media",)
        assert config.mode == DeploymentMode.DEPLOY

    def test_describe(self, make_config):
        details = make_config(frameworks={"python": None, "django": "static"}).describe()

        assert details["Host"] == "web1"
        assert details["Frameworks"] == "python:requirements.txt, django:static"
        assert details["Shared paths"] == "-"


ENV_CONFIG = """\
DEPLOYMENT_DIRECTORY=/srv/app
GIT_REPOSITORY=git@example.com:me/app.git
SSH_HOST=web1
KEEP_RELEASES=5
FRAMEWORKS="python django:static"
SHARED_PATHS=db.sqlite3,media
"""

YAML_CONFIG = """\
deployment_directory: /srv/site
repository: https://example.com/site.git
ssh_host: web2
branch: production
frameworks:
  python:
  django: static
shared_paths:
  - db.sqlite3
  - media/uploads
"""


class TestConfigService:
    def test_no_file_uses_overrides_only(self, tmp_path):
        config = ConfigService(tmp_path).build(
            {"deployment_directory": "/srv/app", "repository": "r", "ssh_host": "h"}
        )

        assert config.deployment_directory == "/srv/app"
        assert config.branch == "master"

    def test_env_file(self, tmp_path):
        (tmp_path / ".deploy-configuration").write_text(ENV_CONFIG)

        config = ConfigService(tmp_path).build()

        assert config.repository == "git@example.com:me/app.git"
        assert config.keep_releases == 5
        assert dict(config.frameworks) == {"python": "requirements.txt", "django": "static"}
        assert config.shared_paths == ("db.sqlite3", "media")

    def test_yaml_file(self, tmp_path):
        (tmp_path / "gitship.yml").write_text(YAML_CONFIG)

        config = ConfigService(tmp_path).build()

        assert config.branch == "production"
        assert dict(config.frameworks) == {"python": "requirements.txt", "django": "static"}
        assert config.shared_paths == ("db.sqlite3", "media/uploads")

    def test_env_file_wins_over_yaml(self, tmp_path):
        (tmp_path / ".deploy-configuration").write_text(ENV_CONFIG)
        (tmp_path / "gitship.yml").write_text(YAML_CONFIG)

        assert ConfigService(tmp_path).build().ssh_host == "web1"

    def test_overrides_take_precedence(self, tmp_path):
        (tmp_path / ".deploy-configuration").write_text(ENV_CONFIG)

        config = ConfigService(tmp_path).build(
            {
                "branch": "main",
                "keep_releases": 2,
                "frameworks": {"npm": None},
                "ssh_host": None,
                "shared_paths": None,
            }
        )

        assert config.branch == "main"
        assert config.keep_releases == 2
        assert config.ssh_host == "web1"
        assert set(config.frameworks) == {"python", "django", "npm"}
        assert config.shared_paths == ("db.sqlite3", "media")

    def test_mode_is_applied(self, tmp_path):
        (tmp_path / ".deploy-configuration").write_text(ENV_CONFIG)

        config = ConfigService(tmp_path).build(mode=DeploymentMode.ROLLBACK)

        assert config.mode == DeploymentMode.ROLLBACK

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigService(tmp_path).build(config_path=tmp_path / "nope.yml")

    def test_invalid_integer(self, tmp_path):
        (tmp_path / ".deploy-configuration").write_text(
            ENV_CONFIG.replace("KEEP_RELEASES=5", "KEEP_RELEASES=three")
        )

        with pytest.raises(ConfigurationError, match="keep_releases"):
            ConfigService(tmp_path).build()

    def test_unknown_yaml_setting(self, tmp_path):
        path = tmp_path / "gitship.yml"
        path.write_text(YAML_CONFIG + "colour: blue\n")

        with pytest.raises(ConfigurationError, match="colour"):
            ConfigService(tmp_path).build()

    def test_yaml_must_be_a_mapping(self, tmp_path):
        (tmp_path / "gitship.yml").write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigService(tmp_path).build()

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "gitship.yml").write_text("frameworks: [python\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigService(tmp_path).build()

    def test_missing_required_setting(self, tmp_path):
        (tmp_path / ".deploy-configuration").write_text("DEPLOYMENT_DIRECTORY=/srv/app\n")

        with pytest.raises(ConfigurationError, match="Git repository not specified"):
            ConfigService(tmp_path).build()


class TestConversions:
    def test_to_int(self):
        assert to_int("4", "keep_releases") == 4
        assert to_int(4, "keep_releases") == 4
        with pytest.raises(ConfigurationError):
            to_int(True, "keep_releases")

    @pytest.mark.parametrize(
        "value",
        [
            "npm,django:static",
            ["npm", "django:static"],
            {"npm": None, "django": "static"},
        ],
    )
    def test_to_frameworks(self, value):
        assert to_frameworks(value) == {"npm": None, "django": "static"}

    def test_to_frameworks_rejects_other_types(self):
        with pytest.raises(ConfigurationError):
            to_frameworks(42)
