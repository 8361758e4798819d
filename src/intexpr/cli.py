"""
intexpr CLI - Entry point.

Commands:
    intexpr eval "(50 - 11) * 2"      -> 78
    intexpr check "1 + 2 * 3"         -> (1 + (2 * 3))
    intexpr --version

Environment:
    INTEXPR_INT_BITS   - integer width for eval (default 32, "none" for unbounded)
    INTEXPR_LOG_LEVEL  - logging level (default WARNING)
"""

from __future__ import annotations

import logging
import sys

import typer
from pydantic import ValidationError

from intexpr._version import __version__
from intexpr.core.environment import ParserSettings, get_settings
from intexpr.core.errors import ExpressionEvalError, ParseError
from intexpr.core.expression_lang import Evaluable, parse

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"intexpr {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("intexpr").setLevel(level)


def _settings(ctx: typer.Context) -> ParserSettings:
    settings = ctx.obj
    if not isinstance(settings, ParserSettings):
        settings = get_settings()
    return settings


def _parse_or_exit(expression: str, settings: ParserSettings) -> Evaluable:
    try:
        return parse(expression, settings)
    except ParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="Parse and evaluate integer arithmetic expressions (+ - * / and parentheses).",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Log parse attempts and matches at DEBUG level"
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """intexpr CLI main callback for global options."""
    settings = get_settings()
    if verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    _configure_logging(settings.log_level)
    ctx.obj = settings


@app.command(name="eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to evaluate"),
    bits: int | None = typer.Option(
        None, "--bits", "-b", help="Signed integer width (overrides INTEXPR_INT_BITS)"
    ),
    unbounded: bool = typer.Option(
        False, "--unbounded", "-u", help="Use unbounded integers instead of a fixed width"
    ),
) -> None:
    """Parse EXPRESSION and print its integer value."""
    if bits is not None and unbounded:
        typer.echo("Error: --bits and --unbounded cannot be used together", err=True)
        raise typer.Exit(code=2)

    settings = _settings(ctx)
    if unbounded or bits is not None:
        try:
            settings = ParserSettings(int_bits=bits, log_level=settings.log_level)
        except ValidationError:
            typer.echo(f"Error: --bits must be between 2 and 128, got {bits}", err=True)
            raise typer.Exit(code=2)

    evaluable = _parse_or_exit(expression, settings)
    try:
        value = evaluable.evaluate()
    except ExpressionEvalError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    logger.debug("Evaluated '%s' with int_bits=%s: %d", expression, settings.int_bits, value)
    typer.echo(str(value))


@app.command(name="check")
def check_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to check"),
) -> None:
    """Validate EXPRESSION without evaluating it and print its fully parenthesized form."""
    evaluable = _parse_or_exit(expression, _settings(ctx))
    typer.echo(str(evaluable))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
