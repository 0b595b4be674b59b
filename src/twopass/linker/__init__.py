"""
Two-Pass Linker
===============

This package links independently assembled object modules into a single
absolute memory image for a word-addressable machine with a fixed memory
size (600 words by default). Each word is a 4-digit instruction: an
opcode digit followed by a 3-digit address.

Main Components
---------------
- **Linker**: Main class that orchestrates the linking process
- **Tokenizer**: Splits input text into word-or-digit tokens
- **ModuleAssembler**: Builds Module records from the token stream
- **LinkSession**: Runs pass 1 and pass 2 and owns the linked output
- **DiagnosticCollector**: Collects errors and warnings found while linking

Linking Process
---------------
1. **Module assembly**: tokens are grouped into definitions, uses and
   program text, one module at a time
2. **Pass 1**: each module is placed right after the previous one and its
   definitions are added to the global symbol table
3. **Pass 2**: every instruction is relocated (R), resolved through the use
   list (E) or kept (I, A), and checked against machine memory

Example Usage
-------------
>>> from twopass.linker import Linker
>>> linker = Linker()
>>> result = linker.link_string("1 A 0  0  1 R 1000")
>>> result.symbols()
{'A': 0}
>>> result.words
[1000]
"""

from twopass.linker.linker import Linker, link, link_file
from twopass.linker.lexer import Token, Tokenizer, tokenize
from twopass.linker.parser import ModuleAssembler, Section, assemble_modules, next_section
from twopass.linker.records import (
    AddressMode,
    Instruction,
    MemoryWord,
    Module,
    Symbol,
    SymbolTableEntry,
    Use,
)
from twopass.linker.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind
from twopass.linker.session import LinkResult, LinkSession
from twopass.linker.report import (
    format_memory_map,
    format_report,
    format_symbol_table,
    format_warnings,
    render_image_as_module,
    write_report,
)

__all__ = [
    # Main class and functions
    "Linker",
    "link",
    "link_file",
    # Tokenizer
    "Token",
    "Tokenizer",
    "tokenize",
    # Module assembler
    "ModuleAssembler",
    "Section",
    "assemble_modules",
    "next_section",
    # Records
    "AddressMode",
    "Instruction",
    "MemoryWord",
    "Module",
    "Symbol",
    "SymbolTableEntry",
    "Use",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    # Session
    "LinkResult",
    "LinkSession",
    # Reports
    "format_memory_map",
    "format_report",
    "format_symbol_table",
    "format_warnings",
    "render_image_as_module",
    "write_report",
]
