"""
Link Diagnostics
================

Recoverable problems found while linking. None of these stop the link:
each one is attached to the symbol table entry or memory word it
concerns, and the collector keeps a running list for reporting.

Errors (attached to data)
-------------------------
- DUPLICATE_DEFINITION: a name is defined again; the first value is kept
- RELATIVE_OVERFLOW: relative address beyond the module; zero used
- EXTERNAL_INDEX_OVERFLOW: use-list index out of range; treated as immediate
- UNDEFINED_EXTERNAL: referenced symbol is not defined; zero used
- MACHINE_BOUNDS_OVERFLOW: address beyond machine memory; zero used

Warnings (produced after pass 2)
--------------------------------
- UNUSED_DEFINITION: a symbol is defined but never referenced
- UNUSED_IN_USE_LIST: a name is in a use list but no instruction uses it
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DiagnosticKind(Enum):
    """Diagnostic categories with their message templates."""

    DUPLICATE_DEFINITION = "Error: This variable is multiply defined; first value used."
    RELATIVE_OVERFLOW = "Error: Relative address exceeds module size; zero used."
    EXTERNAL_INDEX_OVERFLOW = (
        "Error: External address exceeds length of use list; treated as immediate."
    )
    UNDEFINED_EXTERNAL = "Error: {symbol} is not defined; zero used."
    MACHINE_BOUNDS_OVERFLOW = "Error: Absolute address exceeds machine size; zero used."
    UNUSED_DEFINITION = "Warning: {symbol} was defined in module {module} but never used."
    UNUSED_IN_USE_LIST = (
        "Warning: In module {module} {symbol} appeared in the use list "
        "but was not actually used."
    )

    @property
    def is_warning(self) -> bool:
        return self in (DiagnosticKind.UNUSED_DEFINITION, DiagnosticKind.UNUSED_IN_USE_LIST)


@dataclass(frozen=True)
class Diagnostic:
    """
    A single diagnostic.

    Attributes:
        kind: Diagnostic category
        message: Rendered message text
        symbol: Symbol name the diagnostic is about (if any)
        module: 1-based module ordinal the diagnostic is scoped to (if any)
    """
    kind: DiagnosticKind
    message: str
    symbol: Optional[str] = None
    module: Optional[int] = None

    @classmethod
    def create(
        cls,
        kind: DiagnosticKind,
        symbol: Optional[str] = None,
        module: Optional[int] = None,
    ) -> "Diagnostic":
        """Build a diagnostic, filling the kind's message template."""
        message = kind.value.format(symbol=symbol, module=module)
        return cls(kind=kind, message=message, symbol=symbol, module=module)

    @property
    def is_warning(self) -> bool:
        return self.kind.is_warning

    def __str__(self) -> str:
        return self.message


class DiagnosticCollector:
    """
    Collects diagnostics for batch reporting.

    The link session records every diagnostic it attaches to the output
    here, so callers can count and summarize them without walking the
    symbol table and memory map.

    Example:
        collector = DiagnosticCollector()
        collector.add(Diagnostic.create(DiagnosticKind.RELATIVE_OVERFLOW))
        if collector.has_errors():
            print(collector.summary())
    """

    def __init__(self):
        self.errors: list[Diagnostic] = []
        self.warnings: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        """Record a diagnostic and return it."""
        if diagnostic.is_warning:
            self.warnings.append(diagnostic)
        else:
            self.errors.append(diagnostic)
        return diagnostic

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def count(self, kind: DiagnosticKind) -> int:
        """Number of collected diagnostics of one kind."""
        pool = self.warnings if kind.is_warning else self.errors
        return sum(1 for d in pool if d.kind is kind)

    def summary(self) -> str:
        """One-line summary, e.g. '2 errors, 1 warning'."""
        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        return f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()
