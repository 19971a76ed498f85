"""
Shell command builder.

Every value that comes from configuration (paths, branch names, repository
addresses) enters a remote command line through `quote`, never through
string interpolation.
"""

import shlex
from typing import Any


def quote(value: Any) -> str:
    """Quote one argument for a POSIX shell."""
    return shlex.quote(str(value))


class ShellCommand:
    """An immutable shell command line."""

    def __init__(self, text: str):
        self.text = text

    @classmethod
    def of(cls, *argv: Any) -> "ShellCommand":
        """
        Build a simple command from arguments, each quoted.

        Example:
            ShellCommand.of("mkdir", "-p", "/srv/my app")  ->  mkdir -p '/srv/my app'
        """
        return cls(" ".join(quote(arg) for arg in argv))

    @classmethod
    def format(cls, template: str, *args: Any) -> "ShellCommand":
        """
        Fill the `{}` placeholders of a trusted template with quoted arguments.

        Example:
            ShellCommand.format("test -f {} || echo missing", "db.sqlite3")
        """
        return cls(template.format(*(quote(arg) for arg in args)))

    def and_then(self, other: "ShellCommand") -> "ShellCommand":
        return ShellCommand(f"{self.text} && {other.text}")

    def or_else(self, other: "ShellCommand") -> "ShellCommand":
        return ShellCommand(f"{self.text} || {other.text}")

    def in_directory(self, path: str) -> "ShellCommand":
        """Run this command from `path`."""
        return ShellCommand.of("cd", path).and_then(self)

    def redirect_to(self, path: str) -> "ShellCommand":
        return ShellCommand(f"{self.text} > {quote(path)}")

    def merge_stderr(self) -> "ShellCommand":
        return ShellCommand(f"{self.text} 2>&1")

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"ShellCommand({self.text!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, ShellCommand):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)
