"""
Centralized UI constants for consistent styling across Canopy.

This module defines standard symbols, colors, and styles used in Rich
console output throughout the application.
"""

SYMBOLS = {
    "composite": "📁 ",
    "leaf": "📄 ",
    "success": "[bold green]✓[/bold green] ",
    "error": "[bold red]![/bold red] ",
    "warning": "[bold yellow]⚠[/bold yellow] ",
    "info": "[bold blue]i[/bold blue] ",
    "more": "… ",
}

STYLE = {
    "header": "bold cyan",
    "dim": "dim",
    "info": "blue",
    "warning": "yellow",
    "error": "red",
    "success": "green",
    "composite": "bold magenta",
    "leaf": "cyan",
    "value": "green",
    "total": "bold green",
}
