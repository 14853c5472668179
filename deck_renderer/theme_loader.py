"""Theme lookup for the reveal.js presentation runtime."""
from typing import List

from .errors import ConfigurationError

# Themes shipped under css/theme/ in reveal.js 3.9.x
REVEAL_THEMES = (
    "beige",
    "black",
    "blood",
    "league",
    "moon",
    "night",
    "serif",
    "simple",
    "sky",
    "solarized",
    "white",
)

# highlight.js stylesheets shipped under lib/css/
HIGHLIGHT_STYLES = ("monokai", "zenburn")

TRANSITIONS = ("none", "fade", "slide", "convex", "concave", "zoom")


def _check_name(kind: str, name: str) -> None:
    # Names end up inside URLs, so keep them to plain identifiers
    if not name or not name.replace("_", "").replace("-", "").isalnum():
        raise ConfigurationError(f"Invalid {kind} name: {name!r}")


def check_theme(theme: str) -> str:
    """
    Validate a reveal.js theme name.

    Args:
        theme: Theme name (black, white, ...)

    Returns:
        The theme name, unchanged

    Raises:
        ConfigurationError: If the name is malformed or not a known theme
    """
    _check_name("theme", theme)
    if theme not in REVEAL_THEMES:
        raise ConfigurationError(
            f"Theme '{theme}' not found. Available themes: {list_available_themes()}"
        )
    return theme


def check_highlight_style(style: str) -> str:
    """Validate a highlight.js style name, same rules as :func:`check_theme`."""
    _check_name("highlight style", style)
    if style not in HIGHLIGHT_STYLES:
        raise ConfigurationError(
            f"Highlight style '{style}' not found. Available styles: {list(HIGHLIGHT_STYLES)}"
        )
    return style


def list_available_themes() -> List[str]:
    """
    List all available themes.

    Returns:
        List of theme names
    """
    return list(REVEAL_THEMES)


def validate_theme(theme: str) -> bool:
    """
    Check if a theme exists.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme exists, False otherwise
    """
    try:
        check_theme(theme)
        return True
    except ConfigurationError:
        return False


def theme_stylesheet_url(asset_base_url: str, theme: str) -> str:
    return f"{asset_base_url}/css/theme/{theme}.css"


def highlight_stylesheet_url(asset_base_url: str, style: str) -> str:
    return f"{asset_base_url}/lib/css/{style}.css"
