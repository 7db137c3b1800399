import numpy as np
import pytest

from blend_tables.core_types import Colour
from blend_tables.errors import InvalidPaletteSizeError, PaletteReadError
from blend_tables.palette_data import Palette, read_palette_file


def _raw_palette() -> bytes:
    return bytes((i * 3 + c) % 256 for i in range(256) for c in range(3))


def test_from_bytes_reads_rgb_triplets_in_order():
    raw = _raw_palette()
    pal = Palette.from_bytes(raw)

    assert len(pal) == 256
    assert pal.colour_at(0) == Colour(0, 1, 2, 255)
    assert pal.colour_at(1) == Colour(3, 4, 5, 255)
    assert pal.colour_at(255).rgb == (raw[765], raw[766], raw[767])
    assert pal.to_bytes() == raw


def test_every_loaded_entry_is_opaque():
    pal = Palette.from_bytes(_raw_palette())
    assert np.all(pal.rgba[:, 3] == 255)
    assert all(c.alpha == 255 for c in pal)


def test_trailing_bytes_are_ignored():
    raw = _raw_palette()
    assert Palette.from_bytes(raw + b"\xff" * 100) == Palette.from_bytes(raw)


def test_short_buffer_is_rejected():
    with pytest.raises(InvalidPaletteSizeError) as info:
        Palette.from_bytes(b"\x00" * 767)
    assert info.value.size == 767
    assert info.value.expected == 768
    assert isinstance(info.value, ValueError)


def test_palette_is_read_only():
    pal = Palette.from_bytes(_raw_palette())
    with pytest.raises(ValueError):
        pal.rgba[0, 0] = 1
    with pytest.raises(ValueError):
        pal.rgb[0, 0] = 1


def test_colour_at_rejects_out_of_range_index():
    pal = Palette.from_bytes(_raw_palette())
    with pytest.raises(IndexError):
        pal.colour_at(256)
    with pytest.raises(IndexError):
        pal.colour_at(-1)


def test_from_rgb_requires_256_rows():
    with pytest.raises(ValueError):
        Palette.from_rgb(np.zeros((255, 3), dtype=np.uint8))


def test_read_palette_file(tmp_path):
    path = tmp_path / "game.pal"
    path.write_bytes(_raw_palette() + b"extra")
    pal = read_palette_file(path)
    assert pal.to_bytes() == _raw_palette()


def test_read_missing_file_raises_os_error(tmp_path):
    with pytest.raises(PaletteReadError) as info:
        read_palette_file(tmp_path / "missing.pal")
    assert isinstance(info.value, OSError)
    assert "missing.pal" in str(info.value)


def test_read_undersized_file(tmp_path):
    path = tmp_path / "short.pal"
    path.write_bytes(b"\x01" * 300)
    with pytest.raises(InvalidPaletteSizeError):
        read_palette_file(path)
