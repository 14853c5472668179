"""Test theme loader functionality."""

import pytest
from deck_renderer.errors import ConfigurationError
from deck_renderer.theme_loader import (
    check_highlight_style,
    check_theme,
    highlight_stylesheet_url,
    list_available_themes,
    theme_stylesheet_url,
    validate_theme,
)


def test_check_theme_known():
    """Known reveal.js themes are accepted unchanged."""
    assert check_theme("black") == "black"
    assert check_theme("white") == "white"


def test_check_theme_invalid():
    """Test that invalid theme names raise appropriate errors."""
    # Non-existent theme
    with pytest.raises(ConfigurationError, match="not found"):
        check_theme("nonexistent")

    # Invalid characters (path traversal attempt)
    with pytest.raises(ValueError):
        check_theme("../evil")

    with pytest.raises(ValueError):
        check_theme("theme/../../evil")


def test_list_available_themes():
    themes = list_available_themes()

    assert isinstance(themes, list)
    assert "black" in themes
    assert "white" in themes
    assert len(themes) >= 2


def test_validate_theme():
    assert validate_theme("black") is True
    assert validate_theme("solarized") is True

    assert validate_theme("nonexistent") is False
    assert validate_theme("../evil") is False


def test_highlight_styles():
    assert check_highlight_style("monokai") == "monokai"
    with pytest.raises(ConfigurationError):
        check_highlight_style("github")


def test_stylesheet_urls():
    base = "https://cdn.example.org/reveal.js/3.9.2"

    assert theme_stylesheet_url(base, "moon") == f"{base}/css/theme/moon.css"
    assert highlight_stylesheet_url(base, "zenburn") == f"{base}/lib/css/zenburn.css"
