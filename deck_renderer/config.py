"""
Render configuration.

The defaults reproduce the deck build this tool replaces: reveal.js output
whose runtime is loaded from cdnjs at a pinned version. Options can be
layered from the environment, pandoc-style ``-V key=value`` variables and
explicit keyword overrides.
"""
from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import urlsplit

from .errors import ConfigurationError
from .theme_loader import TRANSITIONS, check_highlight_style, check_theme

logger = logging.getLogger(__name__)

DEFAULT_ASSET_BASE_URL = "https://cdnjs.cloudflare.com/ajax/libs/reveal.js/3.9.2"

# Both names produce the same reveal.js slide deck
OUTPUT_FORMATS = ("slides", "revealjs")

ENV_ASSET_BASE_URL = "DECKRENDER_ASSET_BASE_URL"
ENV_THEME = "DECKRENDER_THEME"

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}

# pandoc variable name -> RenderConfig field
_VARIABLES = {
    "revealjs-url": "asset_base_url",
    "theme": "theme",
    "highlight-style": "highlight_style",
    "transition": "transition",
    "title-slide": "title_slide",
    "controls": "controls",
    "progress": "progress",
    "slideNumber": "slide_number",
    "center": "center",
    "history": "history",
    "lang": "lang",
}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"Variable '{name}' expects a boolean, got {value!r}")


@dataclass(frozen=True)
class RenderConfig:
    """Options controlling how a deck is rendered."""

    output_format: str = "slides"
    asset_base_url: str = DEFAULT_ASSET_BASE_URL
    theme: str = "black"
    highlight_style: str = "monokai"
    transition: str = "slide"
    title_slide: bool = True
    controls: bool = True
    progress: bool = True
    slide_number: bool = False
    center: bool = True
    history: bool = True
    lang: Optional[str] = None

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unsupported output format '{self.output_format}'; expected one of {list(OUTPUT_FORMATS)}"
            )

        url = (self.asset_base_url or "").strip()
        if not url or any(ch.isspace() for ch in url) or '"' in url:
            raise ConfigurationError(f"Invalid asset base URL: {self.asset_base_url!r}")
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid asset base URL: {url!r} ({exc})") from exc
        # http(s) with a host, or a plain relative/absolute path
        if parts.scheme not in ("", "http", "https") or (parts.scheme and not parts.netloc):
            raise ConfigurationError(
                f"Asset base URL must be http(s) or a path, got {url!r}"
            )
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "asset_base_url", url.rstrip("/") or "/")

        check_theme(self.theme)
        check_highlight_style(self.highlight_style)
        if self.transition not in TRANSITIONS:
            raise ConfigurationError(
                f"Unknown transition '{self.transition}'; expected one of {list(TRANSITIONS)}"
            )

    @property
    def asset_root(self) -> str:
        """Prefix for asset references; "/" maps to "" so they read "/css/...", not "//css/..."."""
        return self.asset_base_url.rstrip("/")

    def replace(self, **changes) -> "RenderConfig":
        """Return a copy with *changes* applied (validated again)."""
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {sorted(unknown)}")
        return dataclasses.replace(self, **changes)

    def with_variables(self, variables: Mapping[str, Any]) -> "RenderConfig":
        """
        Apply pandoc-style template variables.

        Args:
            variables: Mapping such as ``{"revealjs-url": "...", "theme": "white"}``

        Returns:
            New config with the variables applied

        Raises:
            ConfigurationError: On unknown variables or bad boolean values
        """
        changes: Dict[str, Any] = {}
        bool_fields = {
            f.name for f in dataclasses.fields(self) if f.type in ("bool", bool)
        }
        for name, value in variables.items():
            field = _VARIABLES.get(name)
            if field is None:
                raise ConfigurationError(
                    f"Unknown variable '{name}'; supported: {sorted(_VARIABLES)}"
                )
            changes[field] = _parse_bool(name, value) if field in bool_fields else value
        if changes:
            logger.debug("Applying variables: %s", changes)
        return self.replace(**changes)

    @classmethod
    def from_variables(cls, variables: Mapping[str, Any], **overrides) -> "RenderConfig":
        return cls(**overrides).with_variables(variables)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "RenderConfig":
        """Build a config from ``DECKRENDER_*`` variables; none are required."""
        environ = os.environ if environ is None else environ
        options: Dict[str, Any] = {}
        if environ.get(ENV_ASSET_BASE_URL):
            options["asset_base_url"] = environ[ENV_ASSET_BASE_URL]
        if environ.get(ENV_THEME):
            options["theme"] = environ[ENV_THEME]
        options.update(overrides)
        return cls(**options)

    def reveal_options(self) -> Dict[str, Any]:
        """Options passed to ``Reveal.initialize`` in the rendered page."""
        return {
            "controls": self.controls,
            "progress": self.progress,
            "slideNumber": self.slide_number,
            "center": self.center,
            "history": self.history,
            "transition": self.transition,
            "dependencies": [
                {"src": f"{self.asset_root}/plugin/highlight/highlight.js", "async": True},
                {"src": f"{self.asset_root}/plugin/notes/notes.js", "async": True},
            ],
        }


def parse_variable_args(pairs: Iterable[str]) -> Dict[str, str]:
    """Turn ``["key=value", "flag"]`` CLI arguments into a dict (bare keys mean ``true``)."""
    variables: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not key:
            raise ConfigurationError(f"Malformed variable {pair!r}; expected KEY=VALUE")
        variables[key] = value if sep else "true"
    return variables
