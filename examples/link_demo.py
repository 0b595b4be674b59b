#!/usr/bin/env python3
"""
Two-Pass Linker Demo
====================

This script demonstrates how to use the linker to:
1. Link a file of object modules
2. Inspect the symbol table and memory map
3. Look at the diagnostics attached to the output
4. Relink the memory image and check it is unchanged

Usage:
    source .venv/bin/activate
    python examples/link_demo.py
"""

from pathlib import Path

from twopass import Linker
from twopass.linker import render_image_as_module


def main():
    inputs = Path(__file__).parent / "inputs"

    # ==========================================================================
    # 1. Link a clean input
    # ==========================================================================

    linker = Linker()
    result = linker.link_file(inputs / "input-1.txt")

    print(f"Linked {len(result.modules)} modules:")
    for module in result.modules:
        print(f"  {module}")

    print()
    print(linker.get_report())

    # ==========================================================================
    # 2. Link an input with errors
    # ==========================================================================
    # Errors are attached to the entries they affect; the link still completes.

    result = linker.link_file(inputs / "input-2.txt")
    print(linker.get_report())

    for entry in result.memory_map:
        if entry.error is not None:
            print(f"  word {entry.address}: {entry.error.kind.name}")
    print(f"  {result.diagnostics.summary()}")

    # ==========================================================================
    # 3. Relink the memory image
    # ==========================================================================

    first = linker.link_file(inputs / "input-1.txt")
    image = render_image_as_module(first)
    second = linker.link_string(image, "<image>")

    print()
    print(f"Image relinks unchanged: {first.words == second.words}")
    print(f"New errors: {second.diagnostics.error_count()}")


if __name__ == "__main__":
    main()
