"""
gitship - UI Components
Standardized headers and colors
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

LOGO = "gitship"
BRAND_COLOR = "color(214)"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized gitship command header.

    Args:
        title: Main title (e.g., "Deploy", "Rollback")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy",
            details={"Host": "web1", "Branch": "main"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold {BRAND_COLOR}]{LOGO}[/bold {BRAND_COLOR}] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]", highlight=False)

    if subtitle:
        console.print(f"{prefix} [dim]{escape(subtitle)}[/dim]", highlight=False)

    if details:
        for key, value in details.items():
            console.print(
                f"{prefix} {escape(key)}: [cyan]{escape(str(value))}[/cyan]",
                highlight=False,
            )

    console.print()
