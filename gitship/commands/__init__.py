"""gitship CLI commands"""

from .deploy import deploy
from .releases import releases
from .rollback import rollback

__all__ = ["deploy", "releases", "rollback"]
