"""
Two-Pass Link Session
=====================

This module implements the two linking passes over a sequence of
modules. A LinkSession owns the whole linked artifact: the modules, the
global symbol table, the memory map and the warnings.

Pass 1 (Placement and Symbol Table)
-----------------------------------
Run once per module, in input order, as soon as the module is complete:
- Record the module (its base address was fixed when it was created)
- Convert each definition's relative location to an absolute address
- Add the definition to the global symbol table; a name that is already
  present keeps its first definition and the existing entry is marked
  as multiply defined

Pass 2 (Relocation and Resolution)
----------------------------------
Run once, after every module has been through pass 1, because external
references need the complete symbol table. For each instruction in
module-then-instruction order:

| Mode      | Final address                                   | Bounds check |
|-----------|-------------------------------------------------|--------------|
| Immediate | operand unchanged                               | no           |
| Absolute  | operand unchanged                               | yes          |
| Relative  | operand + module start (0 if operand > length)  | yes          |
| External  | address of the symbol at use-list[operand]      | yes          |

The bounds check runs last and replaces any earlier error on the same
instruction: exactly one error message is kept per word.

After the last module, unused definitions and unused use-list entries
are reported as warnings.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from twopass.config import LinkerConfig, get_default_config
from twopass.errors import LinkStateError
from twopass.linker.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind
from twopass.linker.records import (
    AddressMode,
    Instruction,
    MemoryWord,
    Module,
    SymbolTableEntry,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Link Result
# =============================================================================

@dataclass(frozen=True)
class LinkResult:
    """
    The output of a completed link.

    Attributes:
        modules: All modules, in input order
        symbol_table: Global symbol table entries, ordered by name
        memory_map: The linked program image, one word per instruction
        unused_symbol_warnings: Definitions never referenced, ordered by name
        unused_use_warnings: Use-list entries never referenced, by module
        diagnostics: Every error and warning produced by the link
        machine_memory_size: Memory size the link was checked against
    """
    modules: list[Module]
    symbol_table: list[SymbolTableEntry]
    memory_map: list[MemoryWord]
    unused_symbol_warnings: list[Diagnostic]
    unused_use_warnings: list[Diagnostic]
    diagnostics: DiagnosticCollector
    machine_memory_size: int

    @property
    def words(self) -> list[int]:
        """The memory image as plain integers."""
        return [entry.word for entry in self.memory_map]

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.unused_symbol_warnings + self.unused_use_warnings

    @property
    def has_errors(self) -> bool:
        return self.diagnostics.has_errors()

    def symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to absolute addresses."""
        return {entry.name: entry.location for entry in self.symbol_table}


# =============================================================================
# Link Session
# =============================================================================

class LinkSession:
    """
    Links modules into a single memory image.

    Usage:
        session = LinkSession(LinkerConfig(machine_memory_size=600))
        for module in ModuleAssembler(tokens).modules():
            session.define_module(module)      # pass 1
        result = session.resolve()             # pass 2 + warnings
    """

    def __init__(
        self,
        config: Optional[LinkerConfig] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.config = (config or get_default_config()).validate()
        self.diagnostics = diagnostics or DiagnosticCollector()

        self.modules: list[Module] = []
        self.symbol_table: dict[str, SymbolTableEntry] = {}
        self.memory_map: list[MemoryWord] = []
        self.unused_symbol_warnings: list[Diagnostic] = []
        self.unused_use_warnings: list[Diagnostic] = []

        self._resolved = False

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    # =========================================================================
    # Pass 1: Placement and Symbol Table
    # =========================================================================

    def define_module(self, module: Module) -> None:
        """
        Run pass 1 over one finalized module.

        Raises:
            LinkStateError: If pass 2 has already run, or the module is not
                placed directly after the previous one
        """
        if self._resolved:
            raise LinkStateError(
                f"cannot add module {module.ordinal}: symbols have already been resolved"
            )

        expected_start = self.modules[-1].end_location + 1 if self.modules else 0
        if module.start_location != expected_start:
            raise LinkStateError(
                f"module {module.ordinal} starts at {module.start_location}, "
                f"expected {expected_start}"
            )

        self.modules.append(module)
        logger.debug(f"Pass 1: {module}")

        for symbol in module.definitions:
            entry = self.symbol_table.get(symbol.name)
            if entry is not None:
                # First definition wins; the new symbol stays unlinked
                entry.error = self.diagnostics.add(Diagnostic.create(
                    DiagnosticKind.DUPLICATE_DEFINITION,
                    symbol=symbol.name,
                    module=module.ordinal,
                ))
                logger.debug(
                    f"Symbol '{symbol.name}' redefined in module {module.ordinal}; "
                    f"keeping definition from module {entry.symbol.module}"
                )
                continue

            symbol.absolute_location = (symbol.relative_location or 0) + module.start_location
            symbol.module = module.ordinal
            self.symbol_table[symbol.name] = SymbolTableEntry(symbol)
            logger.debug(f"Defined {symbol.name}={symbol.absolute_location}")

    # =========================================================================
    # Pass 2: Relocation and Resolution
    # =========================================================================

    def resolve(self) -> LinkResult:
        """
        Run pass 2 over every module and produce the link result.

        Raises:
            LinkStateError: If called more than once
        """
        if self._resolved:
            raise LinkStateError("symbols have already been resolved")
        self._resolved = True

        for module in self.modules:
            self._resolve_module(module)

        self._collect_warnings()
        logger.debug(
            f"Pass 2: {len(self.memory_map)} words, {self.diagnostics.summary()}"
        )
        return self.result()

    def _resolve_module(self, module: Module) -> None:
        # Only names defined somewhere can be reported as unused
        module.unresolved_use_names = {
            use.name: None for use in module.uses if use.name in self.symbol_table
        }

        for instruction in module.instructions:
            address, error = self._resolve_instruction(module, instruction)
            if error is not None:
                self.diagnostics.add(error)
                logger.debug(f"Word {len(self.memory_map)} ({instruction}): {error}")

            self.memory_map.append(MemoryWord(
                address=len(self.memory_map),
                word=instruction.opcode * self.config.word_base + address,
                error=error,
                mode=instruction.mode,
            ))

    def _resolve_instruction(
        self, module: Module, instruction: Instruction
    ) -> tuple[int, Optional[Diagnostic]]:
        """Compute the final address of one instruction and its error, if any."""
        mode = instruction.mode
        address = instruction.address
        error: Optional[Diagnostic] = None

        if mode is AddressMode.RELATIVE:
            address = instruction.address + module.start_location
            # Checked against the module length, not the relocated address
            if instruction.address > module.length:
                error = Diagnostic.create(
                    DiagnosticKind.RELATIVE_OVERFLOW, module=module.ordinal
                )
                address = 0

        elif mode is AddressMode.EXTERNAL:
            address, error = self._resolve_external(module, instruction)

        if mode is not AddressMode.IMMEDIATE:
            if address >= self.config.machine_memory_size:
                error = Diagnostic.create(
                    DiagnosticKind.MACHINE_BOUNDS_OVERFLOW, module=module.ordinal
                )
                address = 0

        return address, error

    def _resolve_external(
        self, module: Module, instruction: Instruction
    ) -> tuple[int, Optional[Diagnostic]]:
        index = instruction.address

        if index >= len(module.uses):
            return index, Diagnostic.create(
                DiagnosticKind.EXTERNAL_INDEX_OVERFLOW, module=module.ordinal
            )

        name = module.uses[index].name
        entry = self.symbol_table.get(name)
        if entry is None:
            instruction.address = 0
            return 0, Diagnostic.create(
                DiagnosticKind.UNDEFINED_EXTERNAL, symbol=name, module=module.ordinal
            )

        module.unresolved_use_names.pop(name, None)
        entry.symbol.used = True
        return entry.symbol.absolute_location, None

    # =========================================================================
    # Warnings
    # =========================================================================

    def _collect_warnings(self) -> None:
        for entry in self._sorted_entries():
            if not entry.symbol.used:
                self.unused_symbol_warnings.append(self.diagnostics.add(Diagnostic.create(
                    DiagnosticKind.UNUSED_DEFINITION,
                    symbol=entry.name,
                    module=entry.symbol.module,
                )))

        for module in self.modules:
            for name in module.unresolved_use_names:
                self.unused_use_warnings.append(self.diagnostics.add(Diagnostic.create(
                    DiagnosticKind.UNUSED_IN_USE_LIST,
                    symbol=name,
                    module=module.ordinal,
                )))

    def _sorted_entries(self) -> list[SymbolTableEntry]:
        return [self.symbol_table[name] for name in sorted(self.symbol_table)]

    # =========================================================================
    # Output
    # =========================================================================

    def result(self) -> LinkResult:
        """
        Snapshot the linked artifact.

        Raises:
            LinkStateError: If pass 2 has not run yet
        """
        if not self._resolved:
            raise LinkStateError("symbols have not been resolved yet")

        return LinkResult(
            modules=list(self.modules),
            symbol_table=self._sorted_entries(),
            memory_map=list(self.memory_map),
            unused_symbol_warnings=list(self.unused_symbol_warnings),
            unused_use_warnings=list(self.unused_use_warnings),
            diagnostics=self.diagnostics,
            machine_memory_size=self.config.machine_memory_size,
        )
