"""
tplink - Two-Pass Linker Command-Line Interface
===============================================

This module implements the command-line interface for the linker. It
reads a file of object modules, links them and prints the symbol table,
the memory map and any warnings.

Usage Examples
--------------
Link and print the report:
    $ tplink input-1.txt

Write the report to a file:
    $ tplink input-1.txt -o input-1.out

Link for a machine with a different memory size:
    $ tplink -m 300 input-1.txt

Verbose mode:
    $ tplink -v input-1.txt

Exit Codes
----------
0 - Linked (possibly with errors and warnings in the report)
1 - Malformed input or invalid configuration
2 - Invalid arguments or unreadable input file

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from pathlib import Path
from typing import Optional

import click

from twopass import __version__
from twopass.cli.errors import handle_cli_exception
from twopass.config import get_default_config
from twopass.linker import Linker


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
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
    help="Write the report to a file instead of stdout",
)
@click.option(
    "-m", "--memory-size",
    type=click.IntRange(min=1),
    default=None,
    help="Machine memory size in words (default: 600, or $TWOPASS_MEMORY_SIZE)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tplink")
def main(
    input_file: Path,
    output: Optional[Path],
    memory_size: Optional[int],
    verbose: bool,
) -> None:
    """
    Link object modules into an absolute memory image.

    INPUT_FILE is a text file holding a series of object modules. Each
    module is a definition list, a use list and program text, each
    preceded by its item count.

    Only INPUT_FILE is required. With no options the report goes to
    stdout and the machine has 600 words; -o, -m and -v change that.

    The report lists the symbol table, the memory map and any warnings.
    Errors found while linking (multiply defined symbols, addresses out
    of range, undefined externals) are shown next to the entry they
    affect and do not stop the link.

    \b
    Examples:
        tplink input-1.txt              # Print report to stdout
        tplink input-1.txt -o out.txt   # Write report to a file
        tplink -m 300 input-1.txt       # 300-word machine
    """
    setup_logging(verbose)

    try:
        linker = Linker(
            config=get_default_config(),
            machine_memory_size=memory_size,
            verbose=verbose,
        )
        result = linker.link_file(input_file)

        if output:
            linker.write_report(output)
            if verbose:
                click.echo(f"Wrote report to {output}", err=True)
        else:
            click.echo(linker.get_report(), nl=False)

        if verbose:
            click.echo(
                f"Linked {len(result.modules)} modules into "
                f"{len(result.memory_map)} words "
                f"({result.diagnostics.summary()})",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Link")


if __name__ == "__main__":
    main()
