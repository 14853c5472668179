"""Deck Renderer – top-level package

Exposes the public API (`DeckRenderer`, etc.) **and** sets up a minimal
logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `DECKRENDER_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("DECKRENDER_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .config import DEFAULT_ASSET_BASE_URL, RenderConfig  # noqa: E402  (import after logger)
from .errors import ConfigurationError, ConversionError, NotFoundError, RenderError  # noqa: E402
from .generator import DeckRenderer  # noqa: E402
from .html_renderer import RevealRenderer  # noqa: E402
from .markdown_parser import MarkdownParser  # noqa: E402
from .models import Document, Metadata, Slide  # noqa: E402

__all__ = [
    "DeckRenderer",
    "MarkdownParser",
    "RevealRenderer",
    "RenderConfig",
    "DEFAULT_ASSET_BASE_URL",
    "Document",
    "Metadata",
    "Slide",
    "RenderError",
    "NotFoundError",
    "ConversionError",
    "ConfigurationError",
]
