"""
Two-Pass Linker - Main Interface
================================

This module provides the Linker class, the primary interface for linking
object modules. It coordinates the tokenizer, the module assembler and
the link session to produce a memory image plus diagnostics.

Example Usage
-------------
>>> from twopass.linker import Linker
>>>
>>> linker = Linker()
>>> result = linker.link_string('''
... 1 xy 2
... 2 z xy
... 5 R 1004  I 5678  E 2000  R 8002  E 7001
... 0
... 1 z
... 6 R 8001  E 1000  E 1000  E 3000  R 1002  A 1010
... 0
... 1 z
... 2 R 5001  E 4000
... 1 z 2
... 2 xy z
... 3 A 8000  E 1001  E 2000
... ''')
>>> result.symbols()
{'xy': 2, 'z': 15}
>>> result.words[:3]
[1004, 5678, 2015]
>>> print(linker.get_report())

Command-Line Usage
------------------
    $ tplink input-1.txt
    $ tplink input-1.txt -o input-1.out -m 600
"""

from pathlib import Path
from typing import Optional
import logging

from twopass.config import LinkerConfig, get_default_config
from twopass.errors import LinkStateError
from twopass.linker.lexer import Tokenizer
from twopass.linker.parser import ModuleAssembler
from twopass.linker.report import format_report, write_report
from twopass.linker.session import LinkResult, LinkSession

logger = logging.getLogger(__name__)


class Linker:
    """
    Links a stream of object modules into an absolute memory image.

    The linking pipeline is:
    1. Tokenize the input text (Tokenizer)
    2. Build modules (ModuleAssembler), running pass 1 on each module as
       soon as it is complete
    3. Run pass 2 once every module is placed (LinkSession.resolve)

    A Linker can be reused: every link starts a fresh session.

    Attributes:
        config: Machine configuration used for each link
        verbose: If True, log progress at INFO level instead of DEBUG
    """

    def __init__(self, config: Optional[LinkerConfig] = None,
                 machine_memory_size: Optional[int] = None,
                 verbose: bool = False):
        """
        Initialize the linker.

        Args:
            config: Machine configuration (default: get_default_config())
            machine_memory_size: Overrides config.machine_memory_size
            verbose: Log progress messages at INFO level

        Raises:
            ConfigError: If the resulting configuration is invalid
        """
        base = config or get_default_config()
        self.config = base.with_memory_size(machine_memory_size).validate()
        self.verbose = verbose
        self._result: Optional[LinkResult] = None

    def _log(self, message: str) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, message)

    # =========================================================================
    # Linking
    # =========================================================================

    def link_string(self, source: str, filename: str = "<input>") -> LinkResult:
        """
        Link object modules from a string.

        Args:
            source: Linker input text
            filename: Virtual filename for error messages

        Returns:
            The link result (check result.has_errors for diagnostics)

        Raises:
            LinkSyntaxError: If the input is malformed
        """
        self._result = None
        session = LinkSession(self.config)

        assembler = ModuleAssembler(Tokenizer(source, filename).tokenize())
        for module in assembler.modules():
            session.define_module(module)

        self._log(
            f"Placed {len(session.modules)} modules, "
            f"{len(session.symbol_table)} symbols defined"
        )

        self._result = session.resolve()

        self._log(
            f"Linked {len(self._result.memory_map)} words "
            f"({self._result.diagnostics.summary()})"
        )
        return self._result

    def link_file(self, filepath: str | Path) -> LinkResult:
        """
        Link object modules from a file.

        Raises:
            LinkSyntaxError: If the input is malformed
            FileNotFoundError: If the input file does not exist
        """
        filepath = Path(filepath)
        self._log(f"Linking {filepath}...")
        source = filepath.read_text()
        return self.link_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    @property
    def result(self) -> LinkResult:
        """
        The result of the last link.

        Raises:
            LinkStateError: If nothing has been linked yet
        """
        if self._result is None:
            raise LinkStateError("nothing has been linked yet")
        return self._result

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to absolute addresses."""
        return self.result.symbols()

    def get_memory_image(self) -> list[int]:
        """Return the linked words in program order."""
        return self.result.words

    def has_errors(self) -> bool:
        """Check if the last link produced error diagnostics."""
        return self.result.has_errors

    def get_report(self) -> str:
        """Get the formatted symbol table, memory map and warnings."""
        return format_report(self.result)

    def write_report(self, filepath: str | Path) -> None:
        """Write the formatted report to a file."""
        write_report(self.result, filepath)


# =============================================================================
# Convenience Functions
# =============================================================================

def link(source: str, filename: str = "<input>",
         machine_memory_size: Optional[int] = None) -> LinkResult:
    """
    Convenience function to link source text.

    Raises:
        LinkerError: If linking fails
    """
    return Linker(machine_memory_size=machine_memory_size).link_string(source, filename)


def link_file(filepath: str | Path,
              machine_memory_size: Optional[int] = None) -> LinkResult:
    """
    Convenience function to link a file.

    Raises:
        LinkerError: If linking fails
        FileNotFoundError: If the file does not exist
    """
    return Linker(machine_memory_size=machine_memory_size).link_file(filepath)
