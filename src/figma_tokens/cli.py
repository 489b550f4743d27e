"""
figma-tokens command line interface.

Commands:
- run: Fetch the tokens page and regenerate the SCSS file
- init: Prompt for missing settings and save them to .figma-config.json
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer

from . import __version__
from .cli_ui import RichProgress, print_error, print_info, print_success, print_warning
from .config import CONFIG_FILE, PROMPTS, ensure_config
from .core.errors import FigmaTokensError, PromptCancelledError
from .core.ir import Token
from .runner import TokensRunner

app = typer.Typer(
    help="Generate SCSS variables and mixins from a Figma tokens page",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"figma-tokens {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


# =============================================================================
# Prompts
# =============================================================================


def ask_config_value(field: str, question: str, default: str) -> str:
    """Prompt for one configuration value; empty answers are re-asked."""
    try:
        return typer.prompt(
            question,
            default=default or None,
            hide_input=field == "token",
        ).strip()
    except typer.Abort as e:
        raise PromptCancelledError("Configuration cancelled") from e


def confirm_orphan(token: Token) -> bool:
    """Ask whether a token removed from Figma should be kept as deprecated."""
    try:
        return typer.confirm(
            f"Token '{token.name}' no longer exists in Figma. Keep it as deprecated?",
            default=True,
        )
    except typer.Abort as e:
        raise PromptCancelledError("Cancelled, no files were written") from e


# =============================================================================
# Commands
# =============================================================================


@app.command()
def run(
    config_path: Path = typer.Option(  # noqa: B008
        Path(CONFIG_FILE),
        "--config",
        "-c",
        help="Configuration file",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive/--no-interactive",
        help="Ask before keeping each token that was removed from Figma",
    ),
    defaults: bool | None = typer.Option(
        None,
        "--defaults/--no-defaults",
        help="Append !default to variables (overrides config)",
    ),
    font_variables: bool | None = typer.Option(
        None,
        "--font-variables/--no-font-variables",
        help="Emit font properties as variables (overrides config)",
    ),
) -> None:
    """
    Fetch the tokens page and write the SCSS file and its snapshot.

    Tokens that disappeared since the previous run are kept and marked
    deprecated; with --interactive each one is confirmed first.
    """
    try:
        config = ensure_config(config_path, ask_config_value)
        overrides = {}
        if defaults is not None:
            overrides["emit_defaults"] = defaults
        if font_variables is not None:
            overrides["font_variables"] = font_variables
        if overrides:
            config = config.model_copy(update=overrides)

        runner = TokensRunner(config, Path.cwd(), progress=RichProgress())
        result = runner.run(confirm=confirm_orphan if interactive else None)
    except FigmaTokensError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Generated {len(result.live)} tokens in {result.stylesheet_path}")
    if result.deprecated:
        names = ", ".join(token.name for token in result.deprecated)
        print_warning(f"{len(result.deprecated)} deprecated: {names}")


@app.command()
def init(
    config_path: Path = typer.Option(  # noqa: B008
        Path(CONFIG_FILE),
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Prompt for missing settings and save them."""
    try:
        config = ensure_config(config_path, ask_config_value)
    except FigmaTokensError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration saved to {config_path}")
    for field, question in PROMPTS:
        if field != "token":
            print_info(f"{question}: {getattr(config, field)}")
