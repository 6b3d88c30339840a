#!/usr/bin/env python3
"""Fleet CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.ERRORS_EPILOGUE = ""

from fleet import __version__
from fleet.commands.build import build
from fleet.commands.deploy import deploy
from fleet.commands.init import init
from fleet.commands.upgrade import upgrade

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")
            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="fleet")
def cli():
    """
    Fleet - deploy and upgrade Solana programs with versioned artifacts.

    \b
    Quick Start:
      fleet init                    # Create Fleet.yml
      fleet build                   # Build all programs
      fleet deploy -p escrow        # First deployment
      fleet upgrade -p escrow       # Upgrade through a buffer
    """


cli.add_command(init)
cli.add_command(build)
cli.add_command(deploy)
cli.add_command(upgrade)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
