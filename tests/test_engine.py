import numpy as np
import pytest

from asciigrid.config import Settings
from asciigrid.engine import AsciiArt, AsciiArtEngine
from asciigrid.errors import AlphabetTooSmall, InvalidResolution, UnmatchedPolicyConstraint
from asciigrid.matcher import Policy
from tests.conftest import CountingCoverage, solid


def make_engine(image=None, coverage=None, **settings):
    if image is None:
        image = solid(4, 4, (255, 255, 255))
    return AsciiArtEngine(image, Settings(**settings), coverage=coverage or CountingCoverage())


def test_white_image_maps_to_densest_digit():
    art = make_engine(resolution=2).run()
    assert art.rows == ["88", "88"]


def test_black_image_maps_to_sparsest_digit():
    art = make_engine(solid(4, 4, (0, 0, 0)), resolution=2).run()
    assert art.rows == ["11", "11"]


def test_gradient_uses_several_digits():
    img = np.zeros((1, 8, 3), dtype=np.uint8)
    img[:, :] = np.linspace(0, 255, 8, dtype=np.uint8)[:, None]
    art = make_engine(img, resolution=8).run()
    assert len(art.rows) == 1
    assert art.rows[0][0] == "1"
    assert art.rows[0][-1] == "8"
    assert len(set(art.rows[0])) > 3


def test_non_power_of_two_image_is_padded():
    engine = make_engine(solid(6, 3, (0, 0, 0)), resolution=4)
    art = engine.run()
    assert engine.padded.shape[:2] == (4, 8)
    # 2px cells; white padding fills the outer pixel columns and the bottom pixel row
    assert art.rows == ["7117", "6226"]


def test_second_run_reuses_cached_results():
    coverage = CountingCoverage()
    engine = make_engine(solid(16, 16, (90, 90, 90)), coverage, resolution=4)
    engine.run()
    partition = engine.cache.snapshot.partition
    table = engine.cache.snapshot.table
    measured = len(coverage.calls)

    engine.run()
    assert engine.cache.snapshot.partition is partition
    assert engine.cache.snapshot.table is table
    assert len(coverage.calls) == measured


def test_alphabet_change_measures_only_new_glyphs():
    coverage = CountingCoverage()
    engine = make_engine(coverage=coverage, alphabet="0123")
    engine.run()
    coverage.calls.clear()
    engine.add_glyphs("45")
    engine.remove_glyphs("0")
    engine.run()
    assert sorted(coverage.calls) == ["4", "5"]
    assert engine.cache.snapshot.alphabet == frozenset("12345")


def test_resolution_change_recomputes_partition():
    engine = make_engine(solid(16, 16, (90, 90, 90)), resolution=4)
    engine.run()
    first = engine.cache.snapshot.partition
    engine.set_resolution(8)
    art = engine.run()
    assert engine.cache.snapshot.partition is not first
    assert len(art.rows) == 8


def test_small_alphabet_refused_before_partitioning():
    engine = make_engine(alphabet="0")
    with pytest.raises(AlphabetTooSmall):
        engine.run()
    assert engine.cache.snapshot is None
    assert engine._padded is None


def test_resolution_out_of_bounds():
    engine = make_engine(solid(8, 4, (0, 0, 0)))
    assert engine.resolution_bounds() == (2, 8)
    with pytest.raises(InvalidResolution):
        engine.set_resolution(16)
    engine.resolution = 1
    with pytest.raises(InvalidResolution):
        engine.run()


def test_directional_policies():
    coverage = CountingCoverage({"a": 0.1, "b": 0.2})
    grey = solid(4, 4, (128, 128, 128))
    below = make_engine(grey, coverage, alphabet="ab", policy=Policy.AT_OR_BELOW)
    above = make_engine(grey, coverage, alphabet="ab", policy=Policy.AT_OR_ABOVE)
    assert below.run().rows == ["aa", "aa"]
    assert above.run().rows == ["bb", "bb"]


def test_unmatched_policy_leaves_cache_untouched():
    # equal coverage normalizes both glyphs to 0, so nothing sits above grey
    coverage = CountingCoverage({"a": 0.3, "b": 0.3})
    engine = make_engine(solid(4, 4, (128, 128, 128)), coverage, alphabet="ab", policy=Policy.AT_OR_ABOVE)
    with pytest.raises(UnmatchedPolicyConstraint):
        engine.run()
    assert engine.cache.snapshot is None


def test_single_char_glyphs_only():
    engine = make_engine()
    with pytest.raises(ValueError):
        engine.add_glyphs(["ab"])


def test_canvas_is_centered():
    art = AsciiArt(rows=["ab", "cd"], canvas_width=4, canvas_height=4)
    assert art.to_canvas(".") == ["....", ".ab.", ".cd.", "...."]


def test_run_returns_padded_canvas_size():
    art = make_engine(solid(5, 3, (0, 0, 0)), resolution=2).run()
    assert (art.canvas_width, art.canvas_height) == (8, 4)
    assert len(art.to_canvas()) == 4
    assert all(len(line) == 8 for line in art.to_canvas())


def test_wide_image_resolution_below_row_limit_is_rejected_up_front():
    engine = make_engine(solid(9, 4, (255, 255, 255)), resolution=2)
    assert engine.resolution_bounds() == (4, 9)
    with pytest.raises(InvalidResolution) as info:
        engine.run()
    assert (info.value.minimum, info.value.maximum) == (4, 9)
    assert engine._padded is None

    engine.set_resolution(4)
    assert engine.run().rows == ["8888"]
    engine.set_resolution(9)
    assert len(engine.run().rows) == 4


def test_edits_update_live_table_incrementally():
    engine = make_engine(alphabet="018")
    engine.run()
    engine.add_glyphs("5")
    assert not engine.table.stale
    assert engine.table.normalized["5"] == pytest.approx((0.32 - 0.15) / 0.30)
    engine.remove_glyphs("8")
    assert engine.table.stale
    engine.run()
    assert not engine.table.stale
    assert engine.cache.snapshot.table.normalized["0"] == 1.0


def test_readded_glyph_reuses_cached_coverage():
    coverage = CountingCoverage()
    engine = make_engine(coverage=coverage, alphabet="0123")
    engine.run()
    engine.remove_glyphs("3")
    engine.run()
    engine.remove_glyphs("2")
    coverage.calls.clear()
    engine.add_glyphs("2")
    assert coverage.calls == []
    engine.add_glyphs("3")
    assert coverage.calls == ["3"]
