"""
Link Report Formatting
======================

Text presentation of a LinkResult:

```
Symbol Table
xy=2
z=15 Error: This variable is multiply defined; first value used.

Memory Map
0:  1004
1:  5678
2:  2015
...

Warning: z was defined in module 2 but never used.
```

The report keeps the exact message wording of the diagnostics, so
reports can be compared line by line across runs.
"""

from pathlib import Path

from twopass.linker.records import AddressMode
from twopass.linker.session import LinkResult


def _annotate(text: str, error) -> str:
    return f"{text} {error}" if error is not None else text


def format_symbol_table(result: LinkResult) -> str:
    """Symbol table in name order: 'name=location[ error]'."""
    lines = ["Symbol Table"]
    for entry in result.symbol_table:
        lines.append(_annotate(f"{entry.name}={entry.location}", entry.error))
    return "\n".join(lines)


def format_memory_map(result: LinkResult) -> str:
    """Memory map in program order: 'index: word[ error]'."""
    lines = ["Memory Map"]
    for entry in result.memory_map:
        index = f"{entry.address}:"
        lines.append(_annotate(f"{index:<3} {entry.word}", entry.error))
    return "\n".join(lines)


def format_warnings(result: LinkResult) -> str:
    """Unused definitions, then unused use-list entries module by module."""
    return "\n".join(str(warning) for warning in result.warnings)


def format_report(result: LinkResult) -> str:
    """
    Full link report.

    Returns:
        Symbol table, memory map and (when there are any) warnings,
        separated by blank lines
    """
    sections = [format_symbol_table(result), format_memory_map(result)]
    if result.warnings:
        sections.append(format_warnings(result))
    return "\n\n".join(sections) + "\n"


def write_report(result: LinkResult, filepath: str | Path) -> None:
    """Write the full link report to a text file."""
    with open(filepath, "w") as f:
        f.write(format_report(result))


def render_image_as_module(result: LinkResult, word_digits: int = 4) -> str:
    """
    Render the linked memory image as linker input.

    The output is a single module with no definitions and no uses whose
    program text is the linked image, one word per instruction. Relocated
    and resolved words become Absolute instructions; Immediate words stay
    Immediate so that constants outside machine memory do not trip the
    bounds check when the image is linked again.

    Linking the rendered text reproduces the same words:

        >>> image = render_image_as_module(link(source))
        >>> link(image).words == link(source).words
        True
    """
    parts = ["0", "0", str(len(result.memory_map))]
    for entry in result.memory_map:
        code = AddressMode.IMMEDIATE.value if entry.mode is AddressMode.IMMEDIATE \
            else AddressMode.ABSOLUTE.value
        parts.append(f"{code} {entry.word:0{word_digits}d}")
    return " ".join(parts) + "\n"
