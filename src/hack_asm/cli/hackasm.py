"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Prog.hack beside Prog.asm):
    $ hackasm Prog.asm

With output file:
    $ hackasm Prog.asm -o out/Prog.hack

Into an output directory:
    $ hackasm Prog.asm -d hack-files

Generate listing and symbol files:
    $ hackasm Prog.asm -l Prog.lst -s Prog.sym

Print the machine code instead of writing a file:
    $ hackasm Prog.asm --stdout
"""

from pathlib import Path
from typing import Optional
import logging

import click

from hack_asm import __version__
from hack_asm.assembler import Assembler
from hack_asm.cli.errors import handle_cli_exception
from hack_asm.config import AssemblerConfig


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
    help="Output .hack file (default: input name with .hack suffix)",
)
@click.option(
    "-d", "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for output files (created if missing)",
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
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print machine code to standard output instead of writing a file",
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
    output_dir: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    to_stdout: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    \b
    Examples:
        hackasm Add.asm              # Outputs Add.hack
        hackasm Add.asm -o out.hack  # Specify output file
        hackasm Add.asm -d build     # Outputs build/Add.hack
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if output_dir is not None:
        config.output_dir = output_dir

    asm = Assembler(config)

    try:
        if to_stdout and output is not None:
            raise click.BadParameter(
                "--stdout cannot be combined with an output file.",
                param_hint="--output"
            )

        if verbose:
            click.echo(f"Assembling {input_file}...")

        words = asm.assemble_file(input_file)

        if to_stdout:
            click.echo(asm.get_output_text(), nl=False)
        else:
            written = asm.write_hack(output)
            if verbose:
                click.echo(f"Wrote {len(words)} instructions to {written}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            table = asm.get_symbol_table()
            click.echo(
                f"Assembly complete: {len(words)} instructions, "
                f"{len(table.labels())} labels, {len(table.variables())} variables"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
