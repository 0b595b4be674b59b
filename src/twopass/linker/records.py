"""
Linker Records
==============

Data records produced by the module assembler and filled in by the two
linking passes.

Module Layout
-------------
Each object module in the input is three sections, each introduced by a
count:

```
Section       Items               Example
-----------   -----------------   ---------------------
Definitions   name location       1 xy 2
Uses          name                2 z xy
Program text  classification word 5 R 1004 I 5678 E 2000 R 8002 E 7001
```

A program text word is four decimal digits: the opcode followed by a
3-digit address. The classification tells the linker how to treat the
address:

| Code | Mode      | Address meaning                               |
|------|-----------|-----------------------------------------------|
| I    | Immediate | A constant; left unchanged                    |
| A    | Absolute  | A machine address; left unchanged             |
| R    | Relative  | Offset within the module; relocated           |
| E    | External  | Index into the module's use list; resolved    |
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from twopass.errors import SourceLocation
from twopass.linker.diagnostics import Diagnostic


# =============================================================================
# Addressing Modes
# =============================================================================

class AddressMode(Enum):
    """Instruction addressing modes, keyed by their one-letter code."""

    IMMEDIATE = "I"
    ABSOLUTE = "A"
    RELATIVE = "R"
    EXTERNAL = "E"

    @classmethod
    def from_code(cls, code: str) -> Optional["AddressMode"]:
        """Look up a mode by its classification letter (None if unknown)."""
        try:
            return cls(code)
        except ValueError:
            return None


# =============================================================================
# Module Contents
# =============================================================================

@dataclass
class Symbol:
    """
    A symbol defined by a module.

    Attributes:
        name: Symbol name (its identity)
        relative_location: Offset within the defining module, as read
        absolute_location: Address after pass 1 (None until linked, and
            None forever for a rejected duplicate definition)
        module: 1-based ordinal of the defining module (set by pass 1)
        used: True once an External instruction has resolved to it
        location: Where the definition appears in the input
    """
    name: str
    relative_location: Optional[int] = None
    absolute_location: Optional[int] = None
    module: Optional[int] = None
    used: bool = False
    location: Optional[SourceLocation] = None

    @property
    def is_linked(self) -> bool:
        """True if pass 1 accepted this definition into the symbol table."""
        return self.module is not None


@dataclass(frozen=True)
class Use:
    """
    An entry in a module's use list.

    External instructions refer to it by position.
    """
    name: str
    index: int
    location: Optional[SourceLocation] = None


@dataclass
class Instruction:
    """
    One word of program text.

    Attributes:
        mode: Addressing mode
        opcode: Opcode digit
        address: Address operand; for External instructions this is an index
            into the use list, rewritten to 0 when the symbol is undefined
        location: Where the classification code appears in the input
    """
    mode: AddressMode
    opcode: int
    address: int
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.mode.value} {self.opcode}{self.address:03d}"


@dataclass
class Module:
    """
    One object module placed in the shared address space.

    The module occupies [start_location, end_location]. Its start is
    fixed when it is created, from the end of the previous module.

    Attributes:
        ordinal: 1-based position of the module in the input
        start_location: Absolute address of the first instruction
        definitions: Symbols defined by this module, in input order
        uses: Use list, in input order
        instructions: Program text, in input order
        unresolved_use_names: Names from the use list that are defined
            somewhere but not yet referenced by an External instruction
            (filled in and drained by pass 2)
    """
    ordinal: int
    start_location: int
    definitions: list[Symbol] = field(default_factory=list)
    uses: list[Use] = field(default_factory=list)
    instructions: list[Instruction] = field(default_factory=list)
    unresolved_use_names: dict[str, None] = field(default_factory=dict)

    @property
    def length(self) -> int:
        """Number of words in the module."""
        return len(self.instructions)

    @property
    def end_location(self) -> int:
        """Absolute address of the last instruction (start - 1 if empty)."""
        return self.start_location + self.length - 1

    def add_definition(self, symbol: Symbol) -> None:
        self.definitions.append(symbol)

    def add_use(self, name: str, location: Optional[SourceLocation] = None) -> Use:
        use = Use(name=name, index=len(self.uses), location=location)
        self.uses.append(use)
        return use

    def add_instruction(self, instruction: Instruction) -> None:
        self.instructions.append(instruction)

    def __str__(self) -> str:
        return (
            f"module {self.ordinal} [{self.start_location}..{self.end_location}] "
            f"{len(self.definitions)} defs, {len(self.uses)} uses, "
            f"{self.length} words"
        )


# =============================================================================
# Linked Output
# =============================================================================

@dataclass
class SymbolTableEntry:
    """
    A global symbol table entry: the first definition of a name.

    Attributes:
        symbol: The accepted definition
        error: Set when the name is defined again elsewhere
    """
    symbol: Symbol
    error: Optional[Diagnostic] = None

    @property
    def name(self) -> str:
        return self.symbol.name

    @property
    def location(self) -> int:
        return self.symbol.absolute_location


@dataclass(frozen=True)
class MemoryWord:
    """
    A word of the linked memory image.

    Attributes:
        address: Position in the memory image
        word: Final word (opcode digit followed by the resolved address)
        error: The single error retained for this instruction, if any
        mode: Addressing mode of the instruction the word came from
    """
    address: int
    word: int
    error: Optional[Diagnostic] = None
    mode: AddressMode = AddressMode.ABSOLUTE
