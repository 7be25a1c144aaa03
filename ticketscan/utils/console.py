"""Rich-based console output utilities."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from ticketscan import __version__

custom_theme = Theme(
    {
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold blue",
    }
)

# Global console instances
console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)


def print_error(message: str) -> None:
    """Print error message in red."""
    from ticketscan.utils.logging import log_message

    console_err.print(f"[error][[ERROR]][/error] [red]{escape(message)}[/red]")
    log_message(f"ERROR: {message}")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    from ticketscan.utils.logging import log_message

    console_err.print(f"[warning][[WARNING]][/warning] [yellow]{escape(message)}[/yellow]")
    log_message(f"WARNING: {message}")


def print_info(message: str) -> None:
    """Print info message in blue/cyan."""
    from ticketscan.utils.logging import log_message

    console.print(f"[info][[INFO]][/info] [cyan]{escape(message)}[/cyan]")
    log_message(f"INFO: {message}")


def show_version() -> None:
    """Display version information."""
    from ticketscan import JIRA_API_VERSION

    console.print(f"[bold]ticketscan[/bold] v{__version__}")
    console.print()
    console.print(f"Jira REST API: v{JIRA_API_VERSION}")
    console.print()


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "print_warning",
    "print_info",
    "show_version",
]
