"""
gitship Constants

Centralized constants for magic values, defaults, and remote layout names.
"""

# Default Configuration
DEFAULT_GIT_BRANCH = "master"
DEFAULT_KEEP_RELEASES = 3

# Configuration Files (searched in the working directory, in order)
CONFIG_FILE_NAMES = [".deploy-configuration", "gitship.yml", "gitship.yaml"]
YAML_CONFIG_SUFFIXES = (".yml", ".yaml")
DEFAULT_HOOKS_FILE = ".deploy-hooks.py"

# Remote Layout
RELEASES_DIR = "releases"
SHARED_DIR = "shared"
CURRENT_LINK = "current"
CURRENT_TMP_LINK = "current_tmp"
CURRENT_REVISION_FILE = "CURRENT_REVISION"
CURRENT_COMMIT_FILE = "CURRENT_COMMIT"
RELEASE_REVISION_FILE = "REVISION"

# Release names sort lexicographically in creation order
RELEASE_NAME_FORMAT = "%Y%m%d%H%M%S"

# Frameworks, in pipeline order, with the option used when none is given
FRAMEWORK_DEFAULT_OPTIONS = {
    "npm": "/",
    "sqlite": "db.sqlite3",
    "python": "requirements.txt",
    "django": None,
}
KNOWN_FRAMEWORKS = list(FRAMEWORK_DEFAULT_OPTIONS)

# Python virtualenv created inside each release
VENV_DIR = "venv"

# SSH Configuration
SSH_CONNECTION_TIMEOUT = 10

# Log Configuration
DEFAULT_LOG_DIR = "~/.gitship/logs"
LOG_DIR_ENV_VAR = "GITSHIP_LOG_DIR"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
LOG_TAIL_LINES = 3
