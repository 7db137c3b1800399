#!/usr/bin/env python3
"""
make_tables.py
Build translucency lookup tables for a 256-colour palette.

Usage:
  python make_tables.py -palette PAL [-outfiles 123456789] [-outprefix TRANS]
                        [-blendstyle translucent|add|subtract|reversesubtract|modulate]
                        [--outdir DIR] [--workers N] [--jobs N] [--preview] [--debug]

Input:
  Raw palette file of at least 768 bytes: 256 RGB triplets, no header.
  Extra trailing bytes are ignored.

Output:
  One 65536-byte table per selected level, named <prefix><level>0.lmp.
  The byte at bg * 256 + fg is the palette index nearest to foreground fg
  blended over background bg. --preview also writes a 256x256 PNG per table.

Notes:
  Level digits other than 1..9 are ignored. Unknown blend style names keep the
  current style. Long options may be given with one dash or two.
  CPU bound. ThreadPoolExecutor splits table rows (--workers) and levels (--jobs).
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from blend_tables import __version__
from blend_tables.constants import DEFAULT_LEVEL_DIGITS, DEFAULT_PREFIX
from blend_tables.core_types import BlendConfig
from blend_tables.errors import InvalidPaletteSizeError, PaletteReadError, TableWriteError
from blend_tables.palette_data import read_palette_file
from blend_tables.run import FileTableSink, parse_level_digits, run_tables
from blend_tables.style import STYLE_NAMES, resolve_blend_style
from blend_tables.utils import (
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    log,
    print_banner,
    print_config_line,
    warn,
)

# CLI args & small helpers


def build_parser() -> argparse.ArgumentParser:
    """
    Argument parser for table generation.

    Namespace fields:
      palette: Path or None
      outfiles: digit string or None (all nine levels)
      outprefix: filename prefix
      blendstyle: list of requested style names or None
      outdir: output directory
      workers: threads per table
      jobs: tables computed concurrently
      preview: bool, also write PNG previews
      debug: bool for per-table timing and stats
    """
    parser = argparse.ArgumentParser(
        prog="make_tables",
        description="Build palette translucency lookup tables.",
    )
    parser.add_argument(
        "-palette", "--palette", type=Path, default=None, help="Input palette file. Required."
    )
    parser.add_argument(
        "-outfiles",
        "--outfiles",
        default=None,
        metavar="DIGITS",
        help=f'Levels to write, e.g. "135" writes {DEFAULT_PREFIX}10, {DEFAULT_PREFIX}30 '
        f'and {DEFAULT_PREFIX}50. Defaults to "{DEFAULT_LEVEL_DIGITS}".',
    )
    parser.add_argument(
        "-outprefix",
        "--outprefix",
        default=DEFAULT_PREFIX,
        metavar="PREFIX",
        help=f'Output filename prefix. Defaults to "{DEFAULT_PREFIX}".',
    )
    parser.add_argument(
        "-blendstyle",
        "--blendstyle",
        action="append",
        default=None,
        metavar="STYLE",
        help=f"Blend style: {', '.join(STYLE_NAMES)}. Defaults to translucent.",
    )
    parser.add_argument(
        "--outdir", type=Path, default=Path("."), help="Output directory"
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Threads per table"
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Tables computed in parallel"
    )
    parser.add_argument(
        "--preview", action="store_true", help="Also write a PNG preview per table"
    )
    parser.add_argument("--debug", action="store_true", help="Per-table timing and stats")
    return parser


def _unrecognised_styles(names: Optional[List[str]]) -> List[str]:
    return [n for n in names or () if n.strip().lower() not in STYLE_NAMES]


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point. Returns the process exit status.

    The palette is read and validated before any table is generated; a failed
    table write stops the run and leaves earlier tables in place.
    """
    enable_line_buffered_stdout()
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        print(f"make_tables {__version__}\n", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1
    args = parser.parse_args(argv)

    print_banner(f"make_tables {__version__}")
    t_start = time.perf_counter()

    if args.palette is None:
        error("Palette file not specified. Use the -palette parameter.")
        return 1
    try:
        palette = read_palette_file(args.palette)
    except (PaletteReadError, InvalidPaletteSizeError) as e:
        error(str(e))
        return 1
    log(f"Read palette {args.palette}")

    style = resolve_blend_style(args.blendstyle)
    if args.debug:
        for name in _unrecognised_styles(args.blendstyle):
            debug_log(f"unknown blend style {name!r}, keeping current style")

    levels = parse_level_digits(args.outfiles)
    if not levels:
        warn(f"no levels selected by {args.outfiles!r}, nothing to write")

    config = BlendConfig(
        style=style,
        levels=levels,
        prefix=args.outprefix,
        workers=max(1, args.workers),
        jobs=max(1, args.jobs),
    )
    print_config_line(
        "run",
        [
            ("Style", config.style.value),
            ("Levels", ",".join(str(lvl) for lvl in levels) or "-"),
            ("Workers", config.workers),
            ("Jobs", config.jobs),
        ],
        debug=False,
    )

    try:
        args.outdir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        error(f"could not create output directory {args.outdir}: {e}")
        return 1

    sink = FileTableSink(args.outdir, config.prefix, palette, preview=args.preview)
    try:
        run_tables(palette, config, sink, debug=args.debug)
    except TableWriteError as e:
        error(str(e))
        return 1

    log(f"Done! {len(levels)} table(s) in {format_total_duration_compact(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
