#!/usr/bin/env python3
"""
Nintendo DS Palette Codec - Palette Visualizer

Renders NCLR files (or palette JSON) as PNG swatch sheets, or a single
palette slot as a one-row strip.
"""

import argparse
import sys
from pathlib import Path

from dspal.core.errors import PaletteError
from dspal.core.nclr import NclrFile
from dspal.formats.palette_json import PaletteData
from dspal.rendering.pil_renderer import (
    SWATCH_SIZE,
    render_palette_strip,
    render_palettes_to_image,
)


def load_palettes(input_path: Path) -> list:
    """Load a palette set from an NCLR or palette JSON file."""
    if input_path.suffix.lower() == ".json":
        data = PaletteData()
        data.load(str(input_path))
        return data.palettes
    nclr = NclrFile.from_file(str(input_path), on_diagnostic=lambda d: print(f"Warning: {d}"))
    return nclr.palettes


def main():
    parser = argparse.ArgumentParser(
        description="Render Nintendo DS palettes as PNG swatch sheets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python tools/visualize.py title.nclr
  python tools/visualize.py title.json title.png -s 8

  Render only palette slot 2 as a strip:
    python tools/visualize.py title.nclr slot2.png --slot 2
        """,
    )
    parser.add_argument("input", help="NCLR file or palette JSON file")
    parser.add_argument("output", nargs="?", help="Output PNG file (optional)")
    parser.add_argument(
        "-s",
        "--swatch-size",
        type=int,
        default=SWATCH_SIZE,
        help=f"Swatch size in pixels (default: {SWATCH_SIZE})",
    )
    parser.add_argument("--slot", type=int, help="Render a single palette slot as a strip")

    args = parser.parse_args()

    input_p = Path(args.input)
    if not input_p.is_file():
        print(f"Error: {args.input} not found")
        sys.exit(1)

    try:
        palettes = load_palettes(input_p)
    except (PaletteError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.slot is None:
        img = render_palettes_to_image(palettes, swatch_size=args.swatch_size)
        default_name = input_p.stem + ".png"
    else:
        if not 0 <= args.slot < len(palettes):
            print(f"Error: slot {args.slot} out of range (file has {len(palettes)} slots)")
            sys.exit(1)
        img = render_palette_strip(palettes[args.slot], swatch_size=args.swatch_size)
        default_name = f"{input_p.stem}_slot{args.slot}.png"

    output_path = args.output if args.output else default_name
    img.save(output_path)
    print(f"Saved: {output_path} ({img.width}x{img.height})")


if __name__ == "__main__":
    main()
