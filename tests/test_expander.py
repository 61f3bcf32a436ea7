"""
Tests for resolution expansion.
"""

import pytest

from responsive_images.errors import ConfigurationError
from responsive_images.models import GridEntry, SourceImage
from responsive_images.resolution.expander import (
    ResolutionExpander,
    normalize_hires,
    reproportion,
    resolution_factors,
)


WIDE = SourceImage(width=2000, height=1000)


def test_factor_above_source_is_rejected():
    """Test 2x of a 500px box is dropped for an 800px source."""
    expander = ResolutionExpander(max_resolution_factor=2, resolution_step=1)
    resolutions = expander.expand({0: GridEntry(width=500)}, SourceImage(width=800, height=600))

    assert resolutions == {0: {1.0: 500}}


def test_expand_default_steps():
    grid = {992: GridEntry(width=480), 0: GridEntry(width=270)}
    resolutions = ResolutionExpander().expand(grid, WIDE)

    assert resolutions == {
        992: {2.0: 960, 1.5: 720, 1.0: 480},
        0: {2.0: 540, 1.5: 405, 1.0: 270},
    }
    assert list(resolutions[992]) == [2.0, 1.5, 1.0]


def test_fallback_when_nothing_fits():
    """Test the narrowest breakpoint always gets a usable source."""
    resolutions = ResolutionExpander().expand({0: GridEntry(width=1000)}, SourceImage(width=800, height=600))
    assert resolutions == {0: {1.0: 800}}


def test_breakpoints_without_variants_are_left_out():
    grid = {1400: GridEntry(width=1320), 0: GridEntry(width=540)}
    resolutions = ResolutionExpander().expand(grid, SourceImage(width=1000, height=500))

    assert 1400 not in resolutions
    assert resolutions[0] == {1.5: 810, 1.0: 540}


def test_hires_pixel_cap():
    expander = ResolutionExpander(hires=600)
    assert expander.expand({0: GridEntry(width=400)}, WIDE) == {0: {1.5: 600, 1.0: 400}}


def test_hires_factor_override():
    expander = ResolutionExpander(max_resolution_factor=2, resolution_step=1, hires=3)
    resolutions = expander.expand({0: GridEntry(width=500)}, SourceImage(width=3000, height=1500))
    assert resolutions == {0: {3.0: 1500, 2.0: 1000, 1.0: 500}}


def test_hires_disabled():
    for value in (None, False, 0):
        resolutions = ResolutionExpander(hires=value).expand({0: GridEntry(width=400)}, WIDE)
        assert resolutions == {0: {1.0: 400}}


def test_hires_height_cap():
    expander = ResolutionExpander(hires_height=300)
    assert expander.expand({0: GridEntry(width=400)}, WIDE) == {0: {1.5: 600, 1.0: 400}}


def test_hires_height_source():
    expander = ResolutionExpander(hires_height="source")
    _, _, max_height = expander.limits(WIDE)
    assert max_height == 1000


@pytest.mark.parametrize("value", ["tall", 2.5, True])
def test_hires_height_invalid(value):
    with pytest.raises(ConfigurationError):
        ResolutionExpander(hires_height=value).expand({0: GridEntry(width=400)}, WIDE)


def test_invalid_resolution_factor():
    with pytest.raises(ConfigurationError):
        ResolutionExpander(max_resolution_factor=0.5).expand({0: GridEntry(width=400)}, WIDE)
    with pytest.raises(ConfigurationError):
        ResolutionExpander(hires=0.5).expand({0: GridEntry(width=400)}, WIDE)


def test_invalid_resolution_step():
    with pytest.raises(ConfigurationError):
        ResolutionExpander(resolution_step=0).expand({0: GridEntry(width=400)}, WIDE)


def test_grid_heights_choose_master_dimension():
    expander = ResolutionExpander()
    resolutions = expander.expand({0: GridEntry(width=480, height=300)}, SourceImage(width=1000, height=500))
    assert resolutions == {0: {2.0: 960, 1.5: 720, 1.0: 480}}


def test_degenerate_width_passes_through():
    resolutions = ResolutionExpander().expand({0: GridEntry(width=-20)}, WIDE)
    assert resolutions == {0: {1.0: -20}}


def test_monotonic_and_never_upscaled():
    """Test higher factors never give smaller widths and nothing exceeds the cap."""
    source = SourceImage(width=1500, height=900)
    grid = {1400: GridEntry(width=1320), 992: GridEntry(width=480), 576: GridEntry(width=333), 0: GridEntry(width=270)}
    for hires in ("source", 3, 1200):
        expander = ResolutionExpander(max_resolution_factor=3, resolution_step=0.25, hires=hires)
        _, max_width, _ = expander.limits(source)
        for factors in expander.expand(grid, source).values():
            ordered = sorted(factors.items())
            for (low_factor, low_width), (high_factor, high_width) in zip(ordered, ordered[1:]):
                assert high_width >= low_width
            assert all(width <= max_width for width in factors.values())


def test_resolution_factors():
    assert resolution_factors(2, 0.5) == [2.0, 1.5, 1.0]
    assert resolution_factors(2.2, 0.5) == [2.2, 1.7, 1.2, 1.0]
    assert resolution_factors(1, 0.5) == [1.0]
    assert resolution_factors(3, 1) == [3.0, 2.0, 1.0]


def test_reproportion():
    source = SourceImage(width=1000, height=500)
    assert reproportion(source, 400) == (400, 200)
    assert reproportion(source, height=100) == (200, 100)
    assert reproportion(source, 400, 100) == (200, 100)
    assert reproportion(source, 400, 1000) == (400, 200)


def test_reproportion_requires_a_dimension():
    with pytest.raises(ConfigurationError):
        reproportion(SourceImage(width=1000, height=500), 0, 0)


def test_normalize_hires():
    assert normalize_hires("source") == "source"
    assert normalize_hires("2") == 2.0
    assert normalize_hires(True) == "source"
    assert normalize_hires(0) is None
    with pytest.raises(ConfigurationError):
        normalize_hires("lots")
