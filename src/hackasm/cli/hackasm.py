"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Prog.hack next to Prog.asm):
    $ hackasm Prog.asm

With output file:
    $ hackasm Prog.asm -o out/Prog.hack

Generate all output files:
    $ hackasm Prog.asm -l Prog.lst -s Prog.sym

Reject malformed instructions instead of encoding zeros:
    $ hackasm --strict Prog.asm

Verbose mode:
    $ hackasm -v Prog.asm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hackasm import __version__
from hackasm.assembler import Assembler, hack_output_path
from hackasm.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input with .hack suffix)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Report unknown comp/dest/jump fields and duplicate labels as "
         "errors instead of encoding them as zeros.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The output has one 16-character binary word per instruction.

    \b
    Examples:
        hackasm Prog.asm                # Outputs Prog.hack
        hackasm Prog.asm -o out.hack    # Specify output file
        hackasm Prog.asm -l Prog.lst    # Also write a listing
    """
    setup_logging(verbose)

    output_file = output if output is not None else hack_output_path(input_file)

    asm = Assembler(verbose=verbose, strict=strict)

    if verbose:
        click.echo(f"Strict mode: {'enabled' if strict else 'disabled'}")

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        asm.assemble_file(input_file)

        asm.write_hack(output_file)
        if verbose:
            click.echo(f"Wrote {len(asm.get_code())} instructions to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(f"Defined {len(asm.get_symbols())} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
