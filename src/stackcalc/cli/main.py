# src/stackcalc/cli/main.py
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..config import config
from ..diagnostics import Diagnostics, FatalEvaluationError, SourceError
from ..calc_token import EOF
from ..evaluator import Evaluator
from ..lexer import Lexer
from ..object import format_value
from ..runner import run as run_file
from ..source import SourceCursor

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _configure_logging(verbose):
    if config.enable_debug_logs:
        verbose = max(verbose, 2)
    if verbose:
        level = logging.DEBUG if verbose > 1 else logging.INFO
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@click.group()
@click.version_option(version=__version__, prog_name="stackcalc")
def cli():
    """stackcalc - evaluate semicolon-terminated arithmetic statements"""
    pass


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--keep-going', is_flag=True, default=False,
              help="Report a failed statement and continue with the next one.")
@click.option('--max-depth', type=click.IntRange(min=1), default=None,
              help="Maximum operand/operator stack depth per statement.")
@click.option('--float-format', type=click.Choice(['repr', 'fixed']), default=None,
              help="Float output style; 'fixed' prints six decimals.")
@click.option('--trace-tokens', is_flag=True, default=False, help="Log every token read.")
@click.option('-v', '--verbose', count=True, help="Enable logging (-vv for debug).")
def run(file, keep_going, max_depth, float_format, trace_tokens, verbose):
    """Evaluate every statement in FILE"""
    _configure_logging(verbose)
    settings = config.replace(
        keep_going=keep_going or None,
        max_stack_depth=max_depth,
        float_format=float_format,
        trace_tokens=trace_tokens or None,
    )
    sys.exit(run_file(file, config=settings, console=console, err_console=err_console))


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def tokens(file):
    """Show the tokens of FILE"""
    try:
        cursor = SourceCursor.open(file)
    except SourceError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(title="Tokens")
    table.add_column("Type", style="cyan")
    table.add_column("Literal", style="green")
    table.add_column("Line", style="yellow")
    table.add_column("Column", style="yellow")

    diagnostics = Diagnostics()
    with cursor:
        for token in Lexer(cursor, trace=False).tokens(diagnostics):
            if token.type == EOF:
                break
            table.add_row(token.type, escape(token.literal), str(token.line), str(token.column))

    console.print(table)
    if diagnostics:
        err_console.print("[bold red]Lexical errors:[/bold red]")
        err_console.print(diagnostics.render(), markup=False)
        sys.exit(1)


@cli.command()
def repl():
    """Start an interactive session"""
    console.print(f"[bold green]stackcalc REPL v{__version__}[/bold green]")
    console.print("Type 'exit' to quit\n")

    while True:
        try:
            code = console.input("[bold blue]>>> [/bold blue]")
        except (KeyboardInterrupt, EOFError):
            console.print("\nGoodbye!")
            break

        if code.strip() in ['exit', 'quit']:
            break
        if not code.strip():
            continue

        evaluator = Evaluator.from_text(code, filename="<repl>")
        diagnostics = Diagnostics()
        try:
            for value in evaluator.evaluate_all(diagnostics):
                console.print(f"[green]{format_value(value, config.float_format)}[/green]")
        except FatalEvaluationError as e:
            console.print(f"[red]fatal: {e}[/red]")
            continue

        if diagnostics:
            line, column = evaluator.position()
            console.print(diagnostics.render(), style="red", markup=False)
            console.print(f"Line: {line}  Col: {column}", style="red", markup=False)


if __name__ == "__main__":
    cli()
