import dataclasses

import numpy as np
import pytest
from PIL import Image

from blend_tables.constants import ALL_LEVELS
from blend_tables.core_types import BlendConfig
from blend_tables.errors import InvalidLevelError, TableWriteError
from blend_tables.image_io import read_table_file
from blend_tables.run import (
    FileTableSink,
    iter_tables,
    parse_level_digits,
    run_tables,
    table_filename,
)
from blend_tables.style import BlendStyle
from blend_tables.tables import generate_table


@pytest.mark.parametrize(
    "text, expected",
    [
        ("15", (1, 5)),
        ("951", (1, 5, 9)),
        ("1a1x0", (1,)),
        ("3 3 3", (3,)),
        ("123456789", ALL_LEVELS),
        ("", ALL_LEVELS),
        (None, ALL_LEVELS),
        ("abc0", ()),
    ],
)
def test_parse_level_digits(text, expected):
    assert parse_level_digits(text) == expected


def test_table_filename():
    assert table_filename("TRANS", 3) == "TRANS30.lmp"
    assert table_filename("FOG", 9) == "FOG90.lmp"
    with pytest.raises(InvalidLevelError):
        table_filename("TRANS", 10)


def test_config_is_immutable():
    config = BlendConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.style = BlendStyle.ADD  # type: ignore[misc]


@pytest.mark.parametrize("jobs", [1, 3])
def test_iter_tables_yields_ascending_levels(jobs, random_palette):
    config = BlendConfig(style=BlendStyle.ADD, levels=(5, 1, 3, 5), jobs=jobs)
    got = list(iter_tables(random_palette, config))

    assert [level for level, _ in got] == [1, 3, 5]
    for level, table in got:
        assert np.array_equal(table, generate_table(random_palette, BlendStyle.ADD, level))


def test_iter_tables_rejects_bad_level_before_generating(random_palette):
    config = BlendConfig(levels=(1, 12))
    with pytest.raises(InvalidLevelError):
        next(iter_tables(random_palette, config))


def test_two_levels_write_exactly_two_files(tmp_path, random_palette):
    config = BlendConfig(levels=parse_level_digits("15"))
    sink = FileTableSink(tmp_path, config.prefix)

    results = run_tables(random_palette, config, sink)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["TRANS10.lmp", "TRANS50.lmp"]
    assert [level for level, _ in results] == [1, 5]
    for level in (1, 5):
        path = tmp_path / f"TRANS{level}0.lmp"
        assert path.stat().st_size == 65536
        expected = generate_table(random_palette, BlendStyle.TRANSLUCENT, level)
        assert np.array_equal(read_table_file(path), expected)


def test_preview_images(tmp_path, random_palette):
    config = BlendConfig(levels=(2,), prefix="FX")
    sink = FileTableSink(tmp_path, config.prefix, random_palette, preview=True)
    run_tables(random_palette, config, sink)

    assert sorted(p.name for p in sink.written) == ["FX20.lmp", "FX20.png"]
    with Image.open(tmp_path / "FX20.png") as im:
        assert im.size == (256, 256)
        assert im.mode == "P"
        table = read_table_file(tmp_path / "FX20.lmp")
        assert np.array_equal(np.array(im, dtype=np.uint8).reshape(-1), table)


def test_preview_requires_palette(tmp_path):
    with pytest.raises(ValueError):
        FileTableSink(tmp_path, "TRANS", preview=True)


def test_sink_failure_stops_the_run(random_palette):
    handed_off = []

    def sink(level, table):
        if level == 3:
            raise TableWriteError(f"TRANS{level}0.lmp", "disk full")
        handed_off.append(level)

    config = BlendConfig(levels=(1, 2, 3, 4, 5))
    with pytest.raises(TableWriteError):
        run_tables(random_palette, config, sink)
    assert handed_off == [1, 2]


def test_unwritable_directory_raises_table_write_error(tmp_path, random_palette):
    sink = FileTableSink(tmp_path / "missing" / "dir", "TRANS")
    with pytest.raises(TableWriteError) as info:
        run_tables(random_palette, BlendConfig(levels=(1,)), sink)
    assert isinstance(info.value, OSError)


def test_earlier_tables_survive_a_failed_write(tmp_path, random_palette):
    sink = FileTableSink(tmp_path, "TRANS")
    # a directory where TRANS20.lmp should go makes that write fail
    (tmp_path / "TRANS20.lmp").mkdir()

    with pytest.raises(TableWriteError):
        run_tables(random_palette, BlendConfig(levels=(1, 2, 3)), sink)

    assert (tmp_path / "TRANS10.lmp").is_file()
    assert not (tmp_path / "TRANS30.lmp").exists()
