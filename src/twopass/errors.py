"""
Linker Error Hierarchy
======================

This module defines the exception hierarchy for the linker. All fatal
errors inherit from LinkerError, allowing callers to catch every
"could not link" condition with a single except clause.

Exception Hierarchy
-------------------
LinkerError (base)
├── LinkSyntaxError - non-numeric count, location or instruction word
├── LinkStateError - passes invoked out of order
└── ConfigError - invalid machine configuration

Fatal Errors vs Diagnostics
---------------------------
Exceptions here abort the link. Problems that the linker can recover
from (duplicate definitions, out-of-range addresses, unused symbols) are
never raised: they are attached to the linked output as Diagnostic values
(see twopass.linker.diagnostics). A caller can therefore distinguish
"could not link" (an exception) from "linked with diagnostics" (a result
whose has_errors is True).

Missing or unreadable input files are reported with the built-in OSError
family (FileNotFoundError, PermissionError) and are not wrapped.

Error messages follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LinkerError(Exception):
    """
    Base exception for all fatal linker errors.

        try:
            linker.link_file("input-1.txt")
        except LinkerError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the input text for error reporting.

    Attributes:
        filename: Name of the input file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Parse Errors
# =============================================================================

class LinkSyntaxError(LinkerError):
    """
    A token that must be a number is not one.

    Raised by the module assembler when:
        - a count or definition location is not a decimal number
        - an instruction word is not an opcode digit followed by an address

    Input that stops part-way through a section is not an error: the
    last module keeps whatever was read before the end.

    Attributes:
        message: The error description
        location: Where in the input the offending token starts (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            input-1.txt:3:5: error: expected a count, got 'xy'
            hint: every section starts with the number of items it holds
        """
        if self.location:
            parts = [f"{self.location}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Usage Errors
# =============================================================================

class LinkStateError(LinkerError):
    """
    Linking steps were invoked in the wrong order.

    Pass 2 needs the complete global symbol table, so a LinkSession
    refuses new modules once resolution has started, and refuses to
    resolve twice.
    """
    pass


class ConfigError(LinkerError):
    """
    Invalid linker configuration.

    The machine memory size must be positive and must fit in the address
    field of a word (at most 1000 words for a 3-digit address).
    """
    pass
