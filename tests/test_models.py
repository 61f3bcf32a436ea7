"""
Tests for data models.
"""

import pytest

from responsive_images.errors import ConfigurationError
from responsive_images.models import (
    AspectRatio,
    BreakpointTable,
    ColumnFraction,
    GridEntry,
    ImageSpec,
    LqipChoice,
    LqipKind,
    Orientation,
    ResolvedImage,
    SourceImage,
    round_half_up,
)


def test_source_image_orientation():
    """Test orientation detection."""
    assert SourceImage(width=1000, height=500).orientation == Orientation.LANDSCAPE
    assert SourceImage(width=500, height=1000).orientation == Orientation.PORTRAIT
    assert SourceImage(width=800, height=800).orientation == Orientation.SQUARE


def test_source_image_ratio():
    """Test height/width ratio rounding."""
    assert SourceImage(width=1000, height=500).ratio == 0.5
    assert SourceImage(width=3, height=1).ratio == 0.33333


def test_source_image_rejects_empty_dimensions():
    """Test that both dimensions must be positive."""
    with pytest.raises(ValueError):
        SourceImage(width=0, height=100)


def test_breakpoint_table_lookup():
    """Test container and activation lookups, including xs."""
    table = BreakpointTable.from_widths("5", {"lg": 960, "sm": 540}, {"lg": 992, "sm": 576})
    assert table.names() == ["lg", "sm"]
    assert table.container("lg") == 960
    assert table.activation("sm") == 576
    assert table.container("xs") == 0
    assert table.smallest.name == "sm"


def test_breakpoint_table_must_descend():
    """Test that tables out of order are rejected."""
    with pytest.raises(ConfigurationError):
        BreakpointTable.from_widths("x", {"sm": 540, "lg": 960}, {"sm": 576, "lg": 992})

    with pytest.raises(ConfigurationError):
        BreakpointTable.from_widths("x", {"lg": 960, "sm": 540}, {"lg": 500, "sm": 576})


def test_breakpoint_table_names_must_match():
    with pytest.raises(ConfigurationError):
        BreakpointTable.from_widths("x", {"lg": 960}, {"md": 768})


def test_column_fraction_is_hashable():
    """Test that equal fractions collapse in a set."""
    fractions = {ColumnFraction(numerator=6, breakpoint="md"), ColumnFraction(numerator=6, breakpoint="md")}
    assert len(fractions) == 1
    assert ColumnFraction(numerator=4).is_xs


def test_grid_entry_scaled():
    """Test scaling rounds both dimensions half up."""
    entry = GridEntry(width=480, height=301).scaled(1.5)
    assert entry.width == 720
    assert entry.height == 452  # 451.5

    assert GridEntry(width=480).scaled(2).height is None


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4) == 2
    assert round_half_up(-2.5) == -3


def test_resolved_image_candidates_deduplicate_urls():
    """Test that repeated widths only produce one srcset candidate."""
    resolved = ResolvedImage(
        name="photo",
        ext="jpg",
        resolutions={0: {2.0: 800, 1.5: 800, 1.0: 400}},
        lqip=LqipChoice(kind=LqipKind.WIDTH, width=400),
    )

    candidates = resolved.candidates(lambda name, ext, width: f"{name}-{width}.{ext}")

    assert candidates == {0: [("photo-800.jpg", 2.0), ("photo-400.jpg", 1.0)]}


def test_resolved_image_default_width():
    """Test that the default width is the biggest of the first media query."""
    resolved = ResolvedImage(
        name="photo",
        ext="jpg",
        resolutions={992: {2.0: 960, 1.0: 480}, 0: {1.0: 270}},
        lqip=LqipChoice(kind=LqipKind.WIDTH, width=270),
    )
    assert resolved.default_width == 960
    assert resolved.orientation is None


def test_missing_image():
    resolved = ResolvedImage.missing_image("photo", "jpg", LqipChoice(kind=LqipKind.INLINE, data_uri="data:,"))
    assert resolved.missing
    assert resolved.alt == "Missing image"
    assert resolved.grid == {}
    assert resolved.default_width is None


def test_image_spec_normalizes_loose_options():
    spec = ImageSpec(src="cat", ext="jpg", ratio="16/9", hires="2")

    assert spec.ratio == AspectRatio(width=16, height=9)
    assert spec.hires == 2.0


def test_image_spec_rejects_invalid_ratio():
    with pytest.raises(ValueError):
        ImageSpec(src="cat", ext="jpg", ratio="wide")
