import numpy as np

from blend_tables.nearest import nearest_palette_index, nearest_palette_indices
from blend_tables.palette_data import Palette


def test_every_entry_matches_its_first_occurrence(random_palette):
    rows = [tuple(r) for r in random_palette.rgb.tolist()]
    for i, colour in enumerate(random_palette):
        assert nearest_palette_index(colour.rgb, random_palette) == rows.index(rows[i])


def test_distinct_palette_matches_itself():
    rows = [(i, 255 - i, (i * 7) % 256) for i in range(256)]
    pal = Palette.from_rgb(rows)
    for i in range(256):
        assert nearest_palette_index(pal.colour_at(i).rgb, pal) == i


def test_exact_match_returns_first_duplicate():
    rows = np.full((256, 3), 200, dtype=np.uint8)
    rows[10] = (1, 2, 3)
    rows[20] = (1, 2, 3)
    pal = Palette.from_rgb(rows)

    assert nearest_palette_index((1, 2, 3), pal) == 10
    assert nearest_palette_index(pal.colour_at(20).rgb, pal) == 10


def test_equal_distance_prefers_lower_index():
    rows = np.full((256, 3), 255, dtype=np.uint8)
    rows[5] = (0, 0, 0)
    rows[9] = (2, 0, 0)
    pal = Palette.from_rgb(rows)

    assert nearest_palette_index((1, 0, 0), pal) == 5


def test_alpha_is_ignored(bw_palette):
    assert nearest_palette_index((250, 250, 250, 0), bw_palette) == 1


def test_vectorised_matches_scalar(random_palette):
    rng = np.random.default_rng(3)
    queries = rng.integers(0, 256, size=(300, 3), dtype=np.uint8)
    # include every palette colour so exact and duplicate matches are covered
    queries = np.concatenate([queries, random_palette.rgb])

    fast = nearest_palette_indices(queries, random_palette.rgb)
    slow = [nearest_palette_index(q.tolist(), random_palette) for q in queries]

    assert fast.dtype == np.uint8
    assert fast.tolist() == slow


def test_vectorised_accepts_rgba_rows(bw_palette):
    rows = np.array([[0, 0, 0, 255], [240, 240, 240, 0]], dtype=np.uint8)
    assert nearest_palette_indices(rows, bw_palette.rgb).tolist() == [0, 1]


def test_vectorised_empty_input(bw_palette):
    out = nearest_palette_indices(np.zeros((0, 3), dtype=np.uint8), bw_palette.rgb)
    assert out.shape == (0,)
