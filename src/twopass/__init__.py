"""
twopass - Two-Pass Linker for a Word-Addressable Teaching Machine
=================================================================

This package links independently assembled object modules into one flat
address space. The target is a hypothetical machine with a fixed-size,
word-addressable memory in which each word holds a 4-digit instruction
(an opcode digit and a 3-digit address).

Main Components
---------------
- **linker**: Tokenizer, module assembler and the two linking passes
- **config**: Machine configuration (memory size)
- **errors**: Fatal error hierarchy
- **cli**: The tplink command-line tool

Quick Start
-----------
Link a file:
    >>> from twopass import Linker
    >>> linker = Linker()
    >>> result = linker.link_file("input-1.txt")
    >>> print(linker.get_report())

Or use the command-line tool:
    $ tplink input-1.txt

Input Format
------------
Each object module is three counted sections:

    1 xy 2                                    definitions (name, offset)
    2 z xy                                    use list
    5 R 1004 I 5678 E 2000 R 8002 E 7001      program text (mode, word)

Version History
---------------
1.0.0 - Initial release with two-pass linker and tplink
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from twopass.config import LinkerConfig, get_default_config, set_default_config
from twopass.errors import (
    LinkerError,
    LinkSyntaxError,
    LinkStateError,
    ConfigError,
    SourceLocation,
)
from twopass.linker import (
    Linker,
    LinkResult,
    LinkSession,
    ModuleAssembler,
    Tokenizer,
    Diagnostic,
    DiagnosticKind,
    link,
    link_file,
    format_report,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Configuration
    "LinkerConfig",
    "get_default_config",
    "set_default_config",
    # Exception hierarchy
    "LinkerError",
    "LinkSyntaxError",
    "LinkStateError",
    "ConfigError",
    "SourceLocation",
    # Linker
    "Linker",
    "LinkResult",
    "LinkSession",
    "ModuleAssembler",
    "Tokenizer",
    "Diagnostic",
    "DiagnosticKind",
    "link",
    "link_file",
    "format_report",
]
