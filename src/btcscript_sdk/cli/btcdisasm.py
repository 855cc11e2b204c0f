"""
btcdisasm - Bitcoin Script Disassembler Command-Line Interface
==============================================================

This module implements the command-line interface for the script
disassembler. Input is hex text (whitespace is ignored, so pasted dumps
work) or, with --binary, a raw bytecode file.

Usage Examples
--------------
Disassemble inline hex:
    $ btcdisasm -x 76a91400112233445566778899aabbccddeeff0011223388ac

Disassemble a hex file with byte offsets:
    $ btcdisasm script.hex --offsets

Full listing with raw bytes:
    $ btcdisasm script.hex --listing

Raw bytecode file:
    $ btcdisasm script.bin --binary -o script.asm
"""

import sys
from pathlib import Path
from typing import Optional

import click

from btcscript_sdk import __version__
from btcscript_sdk.cli.errors import ExitCode, handle_cli_exception
from btcscript_sdk.disassembler import ScriptDisassembler
from btcscript_sdk.hexutil import hex_to_bytes


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-x", "--hex",
    "hex_text",
    type=str,
    default=None,
    help="Hex bytecode to disassemble instead of a file",
)
@click.option(
    "--binary",
    is_flag=True,
    help="Treat INPUT_FILE as raw bytecode rather than hex text",
)
@click.option(
    "--offsets",
    is_flag=True,
    help="Prefix each token with its byte offset",
)
@click.option(
    "--listing",
    is_flag=True,
    help="Show offset, raw bytes and token for each instruction",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="btcdisasm")
def main(
    input_file: Optional[Path],
    hex_text: Optional[str],
    binary: bool,
    offsets: bool,
    listing: bool,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    Disassemble Bitcoin Script bytecode into canonical ASM.

    INPUT_FILE holds the bytecode as hex text (or raw bytes with
    --binary). Without INPUT_FILE or -x, hex is read from standard input.

    \b
    Examples:
        btcdisasm -x 4f005160             # -1 0 1 16
        btcdisasm script.hex --offsets
    """
    if input_file is not None and hex_text is not None:
        click.echo("Error: INPUT_FILE and -x/--hex are mutually exclusive", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if binary and input_file is None:
        click.echo("Error: --binary requires INPUT_FILE", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        if input_file is not None:
            filename = str(input_file)
            if binary:
                data = input_file.read_bytes()
            else:
                data = hex_to_bytes(input_file.read_text(encoding="utf-8"))
        elif hex_text is not None:
            filename = "<hex>"
            data = hex_to_bytes(hex_text)
        else:
            filename = "<stdin>"
            data = hex_to_bytes(sys.stdin.read())

        if verbose:
            click.echo(f"Input: {filename} ({len(data)} bytes)", err=True)

        instructions = ScriptDisassembler(filename).disassemble(data)

        output_lines = []
        for instr in instructions:
            if listing:
                output_lines.append(str(instr))
            elif offsets:
                output_lines.append(f"{instr.offset:04x}: {instr.token}")
            else:
                output_lines.append(instr.token)

        result = "\n".join(output_lines)

        if output:
            output.write_text(result + "\n", encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        else:
            click.echo(result)

        if verbose:
            click.echo(f"Instructions disassembled: {len(instructions)}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
