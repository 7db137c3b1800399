# blend_tables/run.py
from __future__ import annotations

"""
Table set orchestration.

Produces one blend table per requested level, always in ascending level order,
and hands each table to a sink before moving on. A sink failure stops the run;
tables already handed off are left where the sink put them.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .analysis import summarise_table
from .constants import DEFAULT_LEVEL_DIGITS, MAX_LEVEL, MIN_LEVEL, TABLE_FILENAME_TEMPLATE
from .core_types import BlendConfig, LevelSet, TableSink, U8Table
from .image_io import preview_path_for, save_table_preview, write_table_file
from .palette_data import Palette
from .tables import generate_table, validate_level
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string, log


def parse_level_digits(text: Optional[str]) -> LevelSet:
    """
    Levels selected by a digit string such as "135".

    Digits 1..9 select a level; repeats and every other character, including
    '0', are ignored. None or "" selects all nine.
    """
    if not text:
        text = DEFAULT_LEVEL_DIGITS
    chosen = set()
    for ch in text:
        if ch.isascii() and ch.isdigit():
            level = int(ch)
            if MIN_LEVEL <= level <= MAX_LEVEL:
                chosen.add(level)
    return tuple(sorted(chosen))


def table_filename(prefix: str, level: int) -> str:
    """'<prefix><level>0.lmp', e.g. TRANS30.lmp for level 3."""
    return TABLE_FILENAME_TEMPLATE.format(prefix=prefix, level=validate_level(level))


def _ordered_levels(levels: LevelSet) -> LevelSet:
    return tuple(sorted({validate_level(lvl) for lvl in levels}))


def iter_tables(palette: Palette, config: BlendConfig) -> Iterator[Tuple[int, U8Table]]:
    """
    Yield (level, table) in ascending level order.

    With config.jobs > 1 several tables are computed at once; executor.map
    still yields them in submission order.
    """
    levels = _ordered_levels(config.levels)
    if config.jobs <= 1 or len(levels) <= 1:
        for level in levels:
            yield level, generate_table(palette, config.style, level, config.workers)
        return

    def one(level: int) -> Tuple[int, U8Table]:
        return level, generate_table(palette, config.style, level, config.workers)

    with ThreadPoolExecutor(max_workers=config.jobs) as ex:
        for item in ex.map(one, levels):
            yield item


class FileTableSink:
    """
    Writes each table to <outdir>/<prefix><level>0.lmp.

    With preview=True a paletted PNG of the table is written next to it.
    Raises TableWriteError on the first failed write.
    """

    def __init__(
        self,
        outdir: Union[str, Path],
        prefix: str,
        palette: Optional[Palette] = None,
        preview: bool = False,
    ) -> None:
        if preview and palette is None:
            raise ValueError("preview needs the palette")
        self.outdir = Path(outdir)
        self.prefix = prefix
        self.palette = palette
        self.preview = preview
        self.written: List[Path] = []

    def path_for(self, level: int) -> Path:
        return self.outdir / table_filename(self.prefix, level)

    def __call__(self, level: int, table: U8Table) -> Path:
        path = write_table_file(self.path_for(level), table)
        self.written.append(path)
        log(f"Wrote {path.name}")
        if self.preview and self.palette is not None:
            png = save_table_preview(preview_path_for(path), table, self.palette)
            self.written.append(png)
            log(f"Wrote {png.name}")
        return path


def run_tables(
    palette: Palette, config: BlendConfig, sink: TableSink, debug: bool = False
) -> List[Tuple[int, object]]:
    """
    Generate every requested table and pass it to sink as soon as it is ready.

    Returns [(level, sink_result), ...] in ascending level order. Exceptions
    from generation or from the sink propagate and end the run.
    """
    results: List[Tuple[int, object]] = []
    t_prev = time.perf_counter()
    for level, table in iter_tables(palette, config):
        t_ready = time.perf_counter()
        if debug:
            debug_log(
                f"level {level}: "
                + key_value_pairs_to_string(
                    [("Blend", format_seconds_compact(t_ready - t_prev))]
                    + summarise_table(table)
                )
            )
        results.append((level, sink(level, table)))
        t_prev = time.perf_counter()
    return results


__all__ = [
    "parse_level_digits",
    "table_filename",
    "iter_tables",
    "FileTableSink",
    "run_tables",
]
