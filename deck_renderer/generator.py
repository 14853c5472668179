#!/usr/bin/env python3
"""
Main deck renderer module that ties together the markdown parser and the
reveal.js HTML renderer.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import OUTPUT_FORMATS, RenderConfig, parse_variable_args
from .errors import RenderError
from .html_renderer import RevealRenderer
from .markdown_parser import MarkdownParser
from .models import Document
from .paths import read_source, resolve_output_path, write_output

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DeckRenderer:
    """
    Convert a markdown deck into a reveal.js HTML presentation.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        """Create a new :class:`DeckRenderer`.

        Parameters
        ----------
        config
            Render options. Defaults to :class:`RenderConfig` defaults:
            reveal.js 3.9.2 loaded from cdnjs, ``black`` theme.
        """
        self.config = config or RenderConfig()
        self.html_renderer = RevealRenderer(self.config)

    def parse(self, markdown_text: str, base_dir: Optional[PathLike] = None) -> Document:
        """Parse *markdown_text* into a :class:`Document`; images resolve against *base_dir*."""
        return MarkdownParser(base_dir=base_dir).parse_document(markdown_text)

    def render(
        self,
        markdown_text: str,
        base_dir: Optional[PathLike] = None,
        pagetitle: str = "Slides",
    ) -> str:
        """
        Render markdown text to a presentation, without touching the disk.

        Args:
            markdown_text: The markdown deck
            base_dir: Directory for resolving relative image paths
            pagetitle: Page title used when the header declares none

        Returns:
            str: The HTML document

        Raises:
            ConversionError: If the markdown cannot be parsed
        """
        document = self.parse(markdown_text, base_dir=base_dir)
        return self.html_renderer.render(document, pagetitle=pagetitle)

    def render_file(self, input_path: PathLike, output_path: Optional[PathLike] = None) -> Path:
        """
        Render a markdown file and write the presentation.

        Args:
            input_path: Markdown source
            output_path: Destination; defaults to *input_path* with ``.html``

        Returns:
            Path: Where the presentation was written

        Raises:
            NotFoundError: If *input_path* does not exist (nothing is written)
            ConversionError: If parsing or writing fails (nothing is written)
        """
        source = Path(input_path).expanduser()
        markdown_text = read_source(source)
        target = resolve_output_path(source, output_path)

        document = self.parse(markdown_text, base_dir=source.parent)
        html = self.html_renderer.render(document, pagetitle=source.stem)
        write_output(target, html)

        logger.info("Presentation written to %s (%d slides)", target, document.slide_count)
        return target


def _build_parser():
    import argparse

    p = argparse.ArgumentParser(
        prog="deck-render",
        description="Convert Markdown to a reveal.js HTML slide presentation.",
    )
    p.add_argument("markdown", type=Path, help="Markdown file to convert")
    p.add_argument("--to", "-t", dest="output_format", default="slides", choices=OUTPUT_FORMATS,
                   help="Output format (default: slides)")
    p.add_argument("--output", "-o", type=Path,
                   help="Destination HTML path (default: input with .html suffix)")
    p.add_argument("--asset-base-url", "--framework-asset-base-url", dest="asset_base_url",
                   help="Base URL of the reveal.js runtime (default: pinned cdnjs URL)")
    p.add_argument("--theme", help="reveal.js theme (black, white, …)")
    p.add_argument("--highlight-style", help="Code highlighting stylesheet (monokai, zenburn)")
    p.add_argument("--variable", "-V", action="append", default=[], metavar="KEY=VALUE",
                   help="Template variable, e.g. -V revealjs-url=… or -V slideNumber=true")
    p.add_argument("--no-title-slide", dest="title_slide", action="store_false", default=None,
                   help="Do not generate a title slide from the header block")
    p.add_argument("--debug", action="store_true", help="Enable verbose logging")
    return p


def config_from_args(args) -> RenderConfig:
    """Layer environment, ``-V`` variables and explicit flags, in that order."""
    config = RenderConfig.from_env(output_format=args.output_format)
    config = config.with_variables(parse_variable_args(args.variable))
    flags = {
        "asset_base_url": args.asset_base_url,
        "theme": args.theme,
        "highlight_style": args.highlight_style,
        "title_slide": args.title_slide,
    }
    return config.replace(**{k: v for k, v in flags.items() if v is not None})


def main(argv=None) -> int:
    """Command-line entry point for the deck renderer."""
    args = _build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = config_from_args(args)
        DeckRenderer(config).render_file(args.markdown, args.output)
    except RenderError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
