#!/usr/bin/env python3
"""
Nintendo DS Palette Codec - Palette Writer

Writes edited palette JSON back into an NCLR file.

The source NCLR supplies everything the JSON does not: the multi-palette
flag, the container header and any PCMP index table (copied unchanged).
Depth is inferred from the first palette: more than 16 colors writes an
8bpp palette.
"""

import argparse
import sys
from pathlib import Path

from dspal.core.errors import PaletteError
from dspal.core.nclr import NclrFile
from dspal.formats.palette_json import PaletteData


def main():
    parser = argparse.ArgumentParser(
        description="Write palette JSON into a Nintendo DS NCLR file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Write to <source>.modified.nclr:
    python tools/write.py title.nclr title.json

  Write to explicit output:
    python tools/write.py title.nclr title.json -o out/title.nclr
        """,
    )
    parser.add_argument("source", help="Original NCLR file (metadata source)")
    parser.add_argument("palettes", help="Palette JSON file")
    parser.add_argument("-o", "--output", help="Output NCLR file (default: <source>.modified.nclr)")

    args = parser.parse_args()

    source = Path(args.source)
    output = Path(args.output) if args.output else source.with_suffix(".modified.nclr")

    try:
        nclr = NclrFile.from_file(str(source), on_diagnostic=lambda d: print(f"Warning: {d}"))
        data = PaletteData()
        data.load(args.palettes)
    except (PaletteError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if nclr.index_table is not None and len(data.palettes) != nclr.num_palettes:
        print(
            f"Warning: source has a PCMP index table for {nclr.num_palettes} slots "
            f"but JSON has {len(data.palettes)}; the table is written unchanged"
        )

    data.apply_to(nclr)
    output.parent.mkdir(parents=True, exist_ok=True)
    nclr.save(str(output))

    print(f"Wrote {len(data.palettes)} palettes ({nclr.depth.name}) to: {output}")


if __name__ == "__main__":
    main()
