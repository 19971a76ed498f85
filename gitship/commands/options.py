"""Command-line options shared by deploy, rollback and releases."""

from pathlib import Path

import click

from gitship.utils import parse_framework_specs

_OPTIONS = [
    click.option(
        "-d",
        "--directory",
        "deployment_directory",
        help="Directory where the repository is deployed on the remote host",
    ),
    click.option("-r", "--repository", help="Git repository address"),
    click.option("-b", "--branch", help="Git branch to deploy (default: master)"),
    click.option("-H", "--host", "ssh_host", help="SSH host to deploy to"),
    click.option(
        "-k", "--keep", "keep_releases", type=int, help="Number of releases to keep (default: 3)"
    ),
    click.option(
        "-f",
        "--framework",
        "frameworks",
        multiple=True,
        metavar="NAME[:OPTION]",
        help="Framework to prepare: npm, sqlite, python, django (repeatable)",
    ),
    click.option(
        "-s",
        "--shared",
        "shared_paths",
        multiple=True,
        metavar="PATH",
        help="Release path linked to the shared directory (repeatable)",
    ),
    click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Configuration file (default: .deploy-configuration or gitship.yml)",
    ),
    click.option(
        "--hooks",
        "hooks_path",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Python file defining pre_<step>/post_<step> hooks (default: .deploy-hooks.py)",
    ),
    click.option("--ssh-key", help="Private key passed to ssh -i"),
    click.option("--ssh-port", type=int, help="SSH port"),
    click.option(
        "--timeout", "command_timeout", type=int, help="Timeout of each remote command, in seconds"
    ),
    click.option(
        "--log-dir",
        type=click.Path(file_okay=False, path_type=Path),
        help="Log directory (default: ~/.gitship/logs)",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Show all command output"),
]


def deployment_options(func):
    """Attach the shared options to a click command."""
    for option in reversed(_OPTIONS):
        func = option(func)
    return func


def build_overrides(options: dict) -> dict:
    """Turn parsed options into ConfigService overrides (None = not given)."""
    return {
        "deployment_directory": options.get("deployment_directory"),
        "repository": options.get("repository"),
        "branch": options.get("branch"),
        "ssh_host": options.get("ssh_host"),
        "keep_releases": options.get("keep_releases"),
        "frameworks": parse_framework_specs(options.get("frameworks") or ()) or None,
        "shared_paths": list(options.get("shared_paths") or ()) or None,
        "ssh_key": options.get("ssh_key"),
        "ssh_port": options.get("ssh_port"),
        "command_timeout": options.get("command_timeout"),
    }
