"""
btcdbg - Bitcoin Script Debugger Command-Line Interface
=======================================================

This module implements the command-line front end to the debugger
support: offset tables for a source file, and runs on the external
execution engine with step-by-step output.

The engine is a separate HTTP service (see btcscript_sdk.config for the
default endpoint and the environment variables that override it).

Usage Examples
--------------
Show line and program-counter tables:
    $ btcdbg offsets p2pkh.asm

Run and show the final state:
    $ btcdbg run script.asm

Run with breakpoints, printing every step:
    $ btcdbg --url http://engine:3000/run-job run script.asm -b 3 -b 5 --steps

Exit Codes
----------
0 - Success
1 - Source does not assemble
2 - Invalid arguments
4 - Engine unreachable or bad engine response
5 - Script ran and the engine reported an error
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from btcscript_sdk import __version__
from btcscript_sdk.assembler import tokenize
from btcscript_sdk.cli.errors import ExitCode, handle_cli_exception
from btcscript_sdk.config import EngineConfig
from btcscript_sdk.debugger import DebugView, OffsetMap, SessionState, TerminalStatus, Workspace
from btcscript_sdk.engine import EngineClient
from btcscript_sdk.errors import EngineError

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the engine configuration and verbosity.
    """

    def __init__(self) -> None:
        self.config: EngineConfig = EngineConfig()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def format_view(view: DebugView, words: list[str]) -> list[str]:
    """Render one debugger position as text lines."""
    if view.step == 0:
        return ["(no steps)"]

    if view.token_index is not None and view.token_index < len(words):
        where = f"{words[view.token_index]} (line {view.highlight_line})"
    else:
        where = "(unmapped)"

    stack = ", ".join(view.stack_text.splitlines())
    altstack = ", ".join(view.altstack_text.splitlines())
    return [
        f"step {view.step}: pc={view.program_counter} {where}",
        f"  stack:    [{stack}]",
        f"  altstack: [{altstack}]",
    ]


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "--url",
    type=str,
    default=None,
    help="Engine endpoint (default: $BTCSCRIPT_ENGINE_URL or http://localhost:3000/run-job)",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Engine request timeout in seconds (default: 30)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="btcdbg")
@pass_context
def main(ctx: Context, url: Optional[str], timeout: Optional[float], verbose: bool) -> None:
    """
    Inspect offset tables and step through script runs.

    Runs are executed by an external engine; btcdbg only assembles the
    script, sends it, and maps the returned trace back onto the source.
    """
    ctx.verbose = verbose
    ctx.setup_logging()
    ctx.config = EngineConfig.from_env()
    if url:
        ctx.config.url = url
    if timeout is not None:
        ctx.config.timeout = timeout


# =============================================================================
# Offsets Command
# =============================================================================

@main.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def offsets(ctx: Context, input_file: Path) -> None:
    """
    Print the line table and the pc -> token map of INPUT_FILE.

    The line table gives the byte offset at which each source line
    starts; breakpoints on that line are sent to the engine as that
    offset. The pc map resolves trace program counters back to tokens.
    """
    try:
        source = input_file.read_text(encoding="utf-8")
        offset_map = OffsetMap.from_source(source, str(input_file))
        tokens = tokenize(source, str(input_file))
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    click.echo("Line table:")
    for line, offset in enumerate(offset_map.line_table, start=1):
        click.echo(f"  line {line:>4}  offset {offset}")

    click.echo("PC map:")
    for pc, index in sorted(offset_map.pc_map.items()):
        marker = "  (end)" if pc == offset_map.total_length else ""
        click.echo(f"  pc {pc:>6}  token {index:>4}  {tokens[index].text}{marker}")

    click.echo(f"{offset_map.token_count} tokens, {offset_map.total_length} bytes")


# =============================================================================
# Run Command
# =============================================================================

@main.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-b", "--break",
    "breakpoints",
    multiple=True,
    type=click.IntRange(min=1),
    help="Breakpoint source line (can be repeated)",
)
@click.option(
    "--steps",
    is_flag=True,
    help="Print every step instead of only the final state",
)
@pass_context
def run(ctx: Context, input_file: Path, breakpoints: tuple[int, ...], steps: bool) -> None:
    """
    Run INPUT_FILE on the execution engine and show the trace.

    Without --steps only the final state is printed. The exit code is 5
    when the engine reports a script failure.
    """
    try:
        workspace = Workspace(input_file.read_text(encoding="utf-8"))
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    if workspace.last_error is not None:
        handle_cli_exception(workspace.last_error, verbose=ctx.verbose)

    for line in breakpoints:
        workspace.toggle_breakpoint(line)

    ticket = workspace.begin_run()
    with EngineClient(ctx.config) as client:
        try:
            response = client.run(workspace.run_request())
        except EngineError as e:
            workspace.fail_run(ticket, e)
            handle_cli_exception(e, verbose=ctx.verbose, error_type="Engine")

    workspace.complete_run(ticket, response, jump_to_end=not steps)
    words = workspace.session.tokens

    if steps:
        while True:
            view = workspace.view()
            for text in format_view(view, list(words)):
                click.echo(text)
            if view.state is not SessionState.ACTIVE:
                break
            workspace.step_forward()
    else:
        for text in format_view(workspace.view(), list(words)):
            click.echo(text)

    view = workspace.view()
    if view.terminal_status is TerminalStatus.SUCCESS:
        click.echo("Result: success")
    else:
        click.echo(f"Result: error: {view.error_detail}")
        sys.exit(ExitCode.SCRIPT_FAILED)
