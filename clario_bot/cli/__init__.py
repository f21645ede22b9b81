"""CLI commands for the Clario bot."""

import typer

from clario_bot.cli.bot import app as bot_app

main_app = typer.Typer(
    name="clario-bot",
    help="Clario bot CLI",
    no_args_is_help=True,
)
main_app.add_typer(bot_app, name="bot")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
