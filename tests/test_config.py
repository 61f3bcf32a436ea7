"""
Tests for layout configuration.
"""

import pytest

from responsive_images.config import LayoutConfig
from responsive_images.errors import ConfigurationError


def test_default_tables():
    config = LayoutConfig()

    assert config.breakpoint_table().names() == ["xxl", "xl", "lg", "md", "sm"]
    assert config.breakpoint_table("4").names() == ["xl", "lg", "md", "sm"]
    assert config.breakpoint_table("4").get("lg").activation_width == 992


def test_unsupported_version():
    with pytest.raises(ConfigurationError):
        LayoutConfig().breakpoint_table("3")
    with pytest.raises(ConfigurationError):
        LayoutConfig().with_version("3")


def test_with_version():
    config = LayoutConfig().with_version("4")
    assert config.layout_version == "4"
    assert config.breakpoint_table().version == "4"


def test_unknown_option_is_rejected():
    with pytest.raises(ConfigurationError):
        LayoutConfig.from_options(gutter=15)


def test_invalid_option_value_is_rejected():
    with pytest.raises(ConfigurationError):
        LayoutConfig.from_options(grid_columns=0)


def test_from_env(monkeypatch):
    monkeypatch.setenv("RESPONSIVE_IMAGES_LAYOUT_VERSION", "4")
    monkeypatch.setenv("RESPONSIVE_IMAGES_GUTTER_WIDTH", "15")
    monkeypatch.setenv("RESPONSIVE_IMAGES_MAX_RESOLUTION", "3")

    config = LayoutConfig.from_env(base_url="https://img.example.com/")

    assert config.layout_version == "4"
    assert config.gutter_width == 15
    assert config.default_max_resolution == 3.0
    assert config.base_url == "https://img.example.com/"


def test_dynamic_image_filename():
    config = LayoutConfig()
    assert config.dynamic_image_filename("photo", "jpg", 480) == "/resize?f=photo.jpg&w=480"


def test_custom_table():
    config = LayoutConfig(
        layout_version="x",
        containers={"vx": {"wide": 1000, "narrow": 500}},
        breakpoints={"vx": {"wide": 1100, "narrow": 600}},
    )
    assert config.breakpoint_table().smallest.container_width == 500
