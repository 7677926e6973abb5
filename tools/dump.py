#!/usr/bin/env python3
"""
Nintendo DS Palette Codec - Palette Dumper

Extracts the sub-palettes of NCLR files and saves them as editable JSON.
"""

import argparse
import sys
from pathlib import Path

from dspal.core.diagnostics import Diagnostic
from dspal.core.errors import PaletteError
from dspal.core.nclr import NclrFile
from dspal.formats.palette_json import PaletteData


def print_diagnostic(diag: Diagnostic):
    print(f"  Warning: {diag}")


def dump_palette(nclr_path: Path, output_path: Path) -> bool:
    """
    Dump one NCLR file to JSON.

    Returns:
        True on success, False if the file could not be parsed
    """
    print(f"Reading {nclr_path}...")
    try:
        nclr = NclrFile.from_file(str(nclr_path), on_diagnostic=print_diagnostic)
    except (PaletteError, OSError) as e:
        print(f"  Error: {e}")
        return False

    data = PaletteData.from_nclr(nclr)
    data.save(str(output_path))

    used = sum(1 for palette in nclr.palettes if palette)
    remapped = " (remapped by PCMP)" if nclr.index_table is not None else ""
    print(
        f"  {nclr.depth.name}: {used}/{nclr.num_palettes} palettes{remapped} "
        f"-> {output_path}"
    )
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Dump Nintendo DS NCLR palettes to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Dump single file:
    python tools/dump.py title.nclr
    python tools/dump.py title.nclr title.json

  Dump every .nclr file in a directory:
    python tools/dump.py extracted/ palettes/
        """,
    )
    parser.add_argument("input", help="NCLR file or directory of NCLR files")
    parser.add_argument("output", nargs="?", help="Output JSON file or directory (optional)")

    args = parser.parse_args()

    input_p = Path(args.input)
    if not input_p.exists():
        print(f"Error: {args.input} not found")
        sys.exit(1)

    if input_p.is_file():
        output_path = Path(args.output) if args.output else input_p.with_suffix(".json")
        ok = dump_palette(input_p, output_path)
        sys.exit(0 if ok else 1)

    output_dir = Path(args.output) if args.output else Path("palettes")
    output_dir.mkdir(parents=True, exist_ok=True)

    nclr_files = sorted(p for p in input_p.rglob("*") if p.suffix.lower() == ".nclr")
    if not nclr_files:
        print(f"No NCLR files found in {args.input}")
        return

    failures = 0
    for nclr_file in nclr_files:
        # Output tree mirrors the input tree
        output_path = output_dir / nclr_file.relative_to(input_p).with_suffix(".json")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if not dump_palette(nclr_file, output_path):
            failures += 1

    print(f"\nDumped {len(nclr_files) - failures} of {len(nclr_files)} files")
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
