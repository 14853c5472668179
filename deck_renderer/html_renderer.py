#!/usr/bin/env python3
"""
reveal.js HTML renderer.

Fills a single Jinja2 template with the parsed slides. Every framework asset
(CSS, JS, plugins) is referenced under ``config.asset_base_url``; nothing is
bundled into the page.
"""
import logging
from typing import Optional

from jinja2 import DictLoader, Environment, StrictUndefined

from .config import RenderConfig
from .models import Document
from .theme_loader import highlight_stylesheet_url, theme_stylesheet_url

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "revealjs.html"

REVEALJS_TEMPLATE = """\
<!DOCTYPE html>
<html{% if lang %} lang="{{ lang }}"{% endif %}>
<head>
  <meta charset="utf-8">
  <meta name="generator" content="deck-renderer">
{%- for author in metadata.authors %}
  <meta name="author" content="{{ author }}">
{%- endfor %}
{%- if metadata.date %}
  <meta name="dcterms.date" content="{{ metadata.date }}">
{%- endif %}
  <title>{{ metadata.title or pagetitle }}</title>
  <meta name="apple-mobile-web-app-capable" content="yes">
  <meta name="apple-mobile-web-app-status-bar-style" content="black-translucent">
  <meta name="viewport" content="width=device-width, initial-scale=1.0, maximum-scale=1.0, user-scalable=no, minimal-ui">
  <link rel="stylesheet" href="{{ asset_base_url }}/css/reset.css">
  <link rel="stylesheet" href="{{ asset_base_url }}/css/reveal.css">
  <style>
    code{white-space: pre-wrap;}
    span.smallcaps{font-variant: small-caps;}
    .reveal pre code{max-height: 500px;}
  </style>
  <link rel="stylesheet" href="{{ theme_url }}" id="theme">
  <link rel="stylesheet" href="{{ highlight_url }}">
</head>
<body>
  <div class="reveal">
    <div class="slides">
{% if show_title_slide %}
<section id="title-slide">
  <h1 class="title">{{ metadata.title }}</h1>
{%- for author in metadata.authors %}
  <p class="author">{{ author }}</p>
{%- endfor %}
{%- if metadata.date %}
  <p class="date">{{ metadata.date }}</p>
{%- endif %}
</section>
{% endif %}
{%- for slide in slides %}
<section{% if slide.slide_id %} id="{{ slide.slide_id }}"{% endif %} class="slide" data-slide-index="{{ slide.index }}">
{{ slide.html | safe }}
{%- if slide.notes %}
<aside class="notes">
{{ slide.notes_html | safe }}
</aside>
{%- endif %}
</section>
{%- endfor %}
    </div>
  </div>

  <script src="{{ asset_base_url }}/js/reveal.js"></script>
  <script>
    Reveal.initialize({{ reveal_options | tojson }});
  </script>
</body>
</html>
"""


class RevealRenderer:
    """
    Turns a parsed :class:`Document` into a reveal.js HTML page.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.jinja_env = Environment(
            loader=DictLoader({TEMPLATE_NAME: REVEALJS_TEMPLATE}),
            autoescape=True,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, document: Document, pagetitle: str = "Slides") -> str:
        """
        Render the presentation.

        Args:
            document: Parsed deck
            pagetitle: <title> used when the header declares no title

        Returns:
            The complete HTML document
        """
        config = self.config
        metadata = document.metadata
        template = self.jinja_env.get_template(TEMPLATE_NAME)

        html = template.render(
            lang=config.lang,
            metadata=metadata,
            pagetitle=pagetitle,
            asset_base_url=config.asset_root,
            theme_url=theme_stylesheet_url(config.asset_root, config.theme),
            highlight_url=highlight_stylesheet_url(config.asset_root, config.highlight_style),
            show_title_slide=bool(config.title_slide and metadata.title),
            slides=document.slides,
            reveal_options=config.reveal_options(),
        )
        logger.debug("Rendered %d slide(s) with theme %s", document.slide_count, config.theme)
        return html
