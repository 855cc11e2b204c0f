"""
btcasm - Bitcoin Script Assembler Command-Line Interface
========================================================

This module implements the command-line interface for the script
assembler. It reads ASM text from a file, the command line, a built-in
sample or standard input, and writes the program in one of several
notations.

Usage Examples
--------------
Assemble a file to hex:
    $ btcasm p2pkh.asm

Assemble inline text:
    $ btcasm -e "OP_DUP OP_HASH160 <00112233445566778899aabbccddeeff00112233> OP_EQUALVERIFY OP_CHECKSIG"

Canonical ASM (aliases collapsed, one token per line):
    $ btcasm -e "OP_FALSE OP_TRUE" -f asm

C/C++ initializer to a file:
    $ btcasm p2pkh.asm -f cpp -o script.inc

Built-in sample:
    $ btcasm --sample p2wpkh -f python
"""

import sys
from pathlib import Path
from typing import Optional

import click

from btcscript_sdk import __version__
from btcscript_sdk.assembler import ScriptAssembler
from btcscript_sdk.cli.errors import ExitCode, handle_cli_exception
from btcscript_sdk.disassembler import bytes_to_asm
from btcscript_sdk.export import bytes_to_cpp, bytes_to_python
from btcscript_sdk.hexutil import bytes_to_hex
from btcscript_sdk.samples import SAMPLES, sample_asm

FORMATS = ("hex", "asm", "python", "cpp")


def render(data: bytes, output_format: str) -> str:
    """Render assembled bytes in one of FORMATS."""
    if output_format == "asm":
        return bytes_to_asm(data)
    if output_format == "python":
        return bytes_to_python(data)
    if output_format == "cpp":
        return bytes_to_cpp(data)
    return bytes_to_hex(data)


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
    "-e", "--expr",
    "source_text",
    type=str,
    default=None,
    help="ASM text to assemble instead of a file",
)
@click.option(
    "--sample",
    type=click.Choice(sorted(SAMPLES)),
    default=None,
    help="Assemble a built-in sample script",
)
@click.option(
    "-f", "--format",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    default="hex",
    help="Output notation (default: hex)",
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
@click.version_option(version=__version__, prog_name="btcasm")
def main(
    input_file: Optional[Path],
    source_text: Optional[str],
    sample: Optional[str],
    output_format: str,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble Bitcoin Script ASM into bytecode.

    INPUT_FILE is an ASM source file. Without INPUT_FILE, -e or --sample
    the source is read from standard input.

    \b
    Examples:
        btcasm script.asm                 # Hex to stdout
        btcasm -e "1 OP_DUP" -f cpp       # {0x51, 0x76}
        btcasm --sample p2pkh -f asm      # Canonical ASM
    """
    sources = sum([input_file is not None, source_text is not None, sample is not None])
    if sources > 1:
        click.echo("Error: INPUT_FILE, -e/--expr and --sample are mutually exclusive", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        if input_file is not None:
            filename = str(input_file)
            source = input_file.read_text(encoding="utf-8")
        elif source_text is not None:
            filename = "<expr>"
            source = source_text
        elif sample is not None:
            filename = f"<sample:{sample}>"
            source = sample_asm(sample)
        else:
            filename = "<stdin>"
            source = sys.stdin.read()

        if verbose:
            click.echo(f"Assembling {filename}...", err=True)

        data = ScriptAssembler(filename).assemble(source)
        result = render(data, output_format.lower())

        if output:
            output.write_text(result + "\n", encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        else:
            click.echo(result)

        if verbose:
            click.echo(f"Assembly complete: {len(data)} bytes", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
