"""
Object Module Assembler
=======================

This module turns the token stream into Module records.

The input is a sequence of modules, each made of three sections in a
fixed order. Every section starts with a count:

    DEFINITIONS  n  then n (name, relative-location) pairs
    USES         n  then n names
    INSTRUCTIONS n  then n (classification, word) pairs

A count of 0 moves straight on to the next section. The assembler keeps
an explicit Section cursor that cycles DEFINITIONS -> USES ->
INSTRUCTIONS -> DEFINITIONS through next_section(). A new module starts
each time the cursor comes back to DEFINITIONS, before its definitions
are read (even if there are none); the previous module is yielded to the
caller at that moment, so pass 1 can place it before the next module is
built.

The last module is finalized when the tokens run out, even part-way
through a section: the items read so far are kept and an unfinished
pair is dropped. Only tokens that should be numbers and are not stop
the link. A classification other than I, R or E is kept as written and
treated like an Absolute word.

Example
-------
>>> from twopass.linker.lexer import tokenize
>>> from twopass.linker.parser import ModuleAssembler
>>> tokens = tokenize("1 xy 2  2 z xy  5 R 1004 I 5678 E 2000 R 8002 E 7001")
>>> for module in ModuleAssembler(tokens).modules():
...     print(module)
module 1 [0..4] 1 defs, 2 uses, 5 words
"""

from enum import Enum, auto
from typing import Iterable, Iterator, Optional
import logging
import re

from twopass.errors import LinkSyntaxError
from twopass.linker.lexer import Token, tokenize
from twopass.linker.records import AddressMode, Instruction, Module, Symbol

logger = logging.getLogger(__name__)


# =============================================================================
# Section Cursor
# =============================================================================

class Section(Enum):
    """The three sections of an object module, in input order."""

    DEFINITIONS = auto()
    USES = auto()
    INSTRUCTIONS = auto()

    @property
    def label(self) -> str:
        return {
            Section.DEFINITIONS: "definition",
            Section.USES: "use-list",
            Section.INSTRUCTIONS: "instruction",
        }[self]


_NEXT_SECTION = {
    Section.DEFINITIONS: Section.USES,
    Section.USES: Section.INSTRUCTIONS,
    Section.INSTRUCTIONS: Section.DEFINITIONS,
}


def next_section(section: Section) -> Section:
    """Return the section that follows `section` in a module."""
    return _NEXT_SECTION[section]


# =============================================================================
# Module Assembler
# =============================================================================

class ModuleAssembler:
    """
    Builds Module records from a token stream.

    Usage:
        assembler = ModuleAssembler(tokenize(text, "input-1.txt"))
        for module in assembler.modules():
            session.define_module(module)

    Modules are yielded lazily and in input order. Each module's start
    location is fixed when it is created, from the end of the module
    before it.

    Attributes:
        section: Section whose count token is expected next
    """

    NUMBER_PATTERN = re.compile(r"[0-9]+")

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self.section = Section.DEFINITIONS

    def modules(self) -> Iterator[Module]:
        """
        Yield each finalized module.

        Raises:
            LinkSyntaxError: If a count, location or instruction word is
                not a decimal number
        """
        module: Optional[Module] = None

        for count_token in self._tokens:
            if self.section is Section.DEFINITIONS:
                if module is not None:
                    logger.debug(f"Finalized {module}")
                    yield module
                module = self._start_module(module)

            count = self._parse_number(count_token, f"the {self.section.label} count")
            if not self._read_section(module, count):
                logger.debug(
                    f"Input ended inside the {self.section.label} section of "
                    f"module {module.ordinal}; keeping the items read so far"
                )
                break
            self.section = next_section(self.section)

        # The last module has no successor to trigger its finalization
        if module is not None:
            logger.debug(f"Finalized {module}")
            yield module

    # =========================================================================
    # Section Readers
    # =========================================================================

    def _start_module(self, previous: Optional[Module]) -> Module:
        """Create the next module, placed right after `previous`."""
        if previous is None:
            return Module(ordinal=1, start_location=0)
        return Module(
            ordinal=previous.ordinal + 1,
            start_location=previous.end_location + 1,
        )

    def _read_section(self, module: Module, count: int) -> bool:
        """
        Read the `count` items of the current section into `module`.

        Returns:
            False if the input ran out first. Complete items are kept; a
            half-read pair is dropped.
        """
        for _ in range(count):
            first = self._next_token()
            if first is None:
                return False

            if self.section is Section.USES:
                module.add_use(first.value, first.location)
                continue

            second = self._next_token()
            if second is None:
                return False

            if self.section is Section.DEFINITIONS:
                module.add_definition(Symbol(
                    name=first.value,
                    relative_location=self._parse_number(
                        second, f"a location for symbol '{first.value}'"
                    ),
                    location=first.location,
                ))
            else:
                module.add_instruction(self._parse_instruction(first, second))

        return True

    def _parse_instruction(self, code: Token, word: Token) -> Instruction:
        """Combine a classification token and a word token into an Instruction."""
        mode = AddressMode.from_code(code.value[0])
        if mode is None:
            # Anything but I, R or E is kept as written, like an Absolute word
            logger.debug(
                f"{code.location}: unknown classification '{code.value}', "
                f"treated as absolute"
            )
            mode = AddressMode.ABSOLUTE

        text = word.value
        if len(text) < 2 or not self.NUMBER_PATTERN.fullmatch(text):
            raise LinkSyntaxError(
                f"malformed instruction word '{text}'",
                location=word.location,
                hint="a word is an opcode digit followed by an address, e.g. 1004",
            )

        return Instruction(
            mode=mode,
            opcode=int(text[0]),
            address=int(text[1:]),
            location=code.location,
        )

    # =========================================================================
    # Token Helpers
    # =========================================================================

    def _next_token(self) -> Optional[Token]:
        """Consume one token (None once the input has run out)."""
        return next(self._tokens, None)

    def _parse_number(self, token: Token, expected: str) -> int:
        """Interpret a token as a decimal number."""
        if not self.NUMBER_PATTERN.fullmatch(token.value):
            raise LinkSyntaxError(
                f"expected {expected}, got '{token.value}'",
                location=token.location,
            )
        return int(token.value)


def assemble_modules(source: str, filename: str = "<input>") -> Iterator[Module]:
    """Tokenize `source` and yield its modules."""
    return ModuleAssembler(tokenize(source, filename)).modules()
