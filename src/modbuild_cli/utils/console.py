"""Console utility functions for formatting and output."""

import click
from typing import Optional, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✨',
    'sparkles': '✨',
    'running': '🚀',
    'gear': '⚙️',
    'info': '💡',
    'warning': '⚠️',
    'error': '❌',
    'check': '✅',
    'list': '📋',
    'hammer': '🔨',
    'link': '🔗',
    'folder': '📁',
}


def _get_console() -> Optional[Console]:
    """Get Rich console instance."""
    try:
        return Console()
    except Exception:
        return None


def _rich_echo(message: str, color: str = "white", style: str = None, bold: bool = False, symbol: str = None):
    """Echo message with Rich formatting, falling back to plain click output."""
    # Handle backward compatibility - if style is provided, use it as color
    if style is not None:
        color = style

    if symbol and symbol in STATUS_SYMBOLS:
        symbol_char = STATUS_SYMBOLS[symbol]
        message = f"{symbol_char} {message}"

    console = _get_console()
    if console:
        style_str = f"bold {color}" if bold else color
        # Module output (paths, compiler messages) may contain [brackets]
        console.print(message, style=style_str, markup=False, highlight=False)
        return

    click.echo(message)


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _rich_panel(content: str, title: str = None, style: str = "cyan"):
    """Display content in a Rich panel."""
    console = _get_console()
    if console:
        console.print(Panel(content, title=title, border_style=style))
        return

    if title:
        click.echo(f"\n--- {title} ---")
    click.echo(content)
    if title:
        click.echo("-" * (len(title) + 8))


def _create_modules_table(rows: list, title: str = "Modules") -> Optional[Any]:
    """Create a Rich table listing modules and their capabilities."""
    table = Table(title=f"📋 {title}", show_header=True, header_style="bold cyan")
    table.add_column("Module", style="bold white")
    table.add_column("Exports", style="yellow")
    table.add_column("Requires", style="white")
    table.add_column("Optional", style="white")
    table.add_column("Extension Points", style="magenta")

    for row in rows:
        if isinstance(row, dict):
            table.add_row(
                row.get('name', ''),
                row.get('exports', ''),
                row.get('requires', ''),
                row.get('optional', ''),
                row.get('extension_points', ''),
            )
        else:
            table.add_row(*[str(cell) for cell in row])

    return table
