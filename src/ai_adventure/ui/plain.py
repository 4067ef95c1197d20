"""
plain.py

PURPOSE: Plain text output formatting for the terminal client.
DEPENDENCIES: rich

ARCHITECTURE NOTES:
This module provides formatted console output using Rich.
It handles:
- Story passages
- Numbered choices
- Messages and errors
- The ending panel
"""

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

# Global console instance
console = Console()


def print_story(text: str) -> None:
    """Print a story passage."""
    console.print(Markdown(text))


def print_choices(choices: list[str]) -> None:
    """Print the numbered options for the next move."""
    for number, choice in enumerate(choices, start=1):
        console.print(f"  [bold cyan]{number}.[/bold cyan] {choice}")


def print_message(text: str) -> None:
    """Print a normal message."""
    console.print(text)


def print_error(text: str) -> None:
    """Print an error message."""
    console.print(f"[red]{text}[/red]")


def print_prompt() -> str:
    """Print the input prompt and get user input."""
    return console.input("[bold cyan]>[/bold cyan] ")


def print_title(title: str) -> None:
    """Print a title in a panel."""
    panel = Panel(
        Text(title, justify="center", style="bold"),
        border_style="blue",
    )
    console.print(panel)


def print_ending() -> None:
    """Print the end-of-story panel."""
    panel = Panel(
        Text("The End", justify="center", style="bold green"),
        border_style="green",
    )
    console.print(panel)
