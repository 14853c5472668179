"""
Markdown parser that splits a deck source into slides.
"""
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token

from .errors import ConversionError
from .markdown_plugins.speaker_notes import speaker_notes_plugin
from .models import Document, Metadata, Slide
from .paths import resolve_asset

logger = logging.getLogger(__name__)

NOTES_OPEN = "container_notes_open"
NOTES_CLOSE = "container_notes_close"

# pandoc-style fence attributes: ```{.python .numberLines}
_FENCE_ATTR_CLASS = re.compile(r"\{\s*\.([\w+#-]+)")


class MarkdownParser:
    """
    Deck parser using markdown-it-py.

    A document is an optional header block followed by slides separated by
    top-level horizontal rules. N separators always yield N+1 slides.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize the markdown parser.

        Args:
            base_dir: Base directory for resolving relative image paths.
                Defaults to the current working directory.
        """
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()

        self.markdown_processor = MarkdownIt('commonmark', {
            'html': True,          # Enable HTML tags
            'typographer': False,  # Keep text verbatim
        })
        self.markdown_processor.enable(['table', 'strikethrough'])

        # ---------------------------------------------------------
        # PLUGIN ECOSYSTEM
        # ---------------------------------------------------------
        # 1) front_matter_plugin : `---` YAML header block with title/author/date
        # 2) container_plugin    : `::: notes` speaker-note blocks
        # 3) speaker_notes_plugin: `???` speaker-note lines
        # 4) anchors_plugin      : heading ids, used as slide ids
        # 5) attrs_plugin        : `{.class #id key=val}` attributes
        # 6) dollarmath_plugin   : `$...$` / `$$...$$` passed through as math spans
        from mdit_py_plugins.anchors import anchors_plugin
        from mdit_py_plugins.attrs import attrs_plugin
        from mdit_py_plugins.container import container_plugin
        from mdit_py_plugins.dollarmath import dollarmath_plugin
        from mdit_py_plugins.front_matter import front_matter_plugin

        self.markdown_processor = (
            self.markdown_processor
                .use(front_matter_plugin)
                .use(container_plugin, 'notes')
                .use(speaker_notes_plugin)
                .use(anchors_plugin, min_level=1, max_level=6)
                .use(attrs_plugin)
                .use(dollarmath_plugin,
                     allow_space=False,      # Don't allow spaces after/before $
                     allow_digits=False,     # "$5 and $10" stays text
                     double_inline=False)
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, markdown_text: str) -> str:
        """
        Parse markdown text to HTML without slide splitting.

        The header block is dropped and speaker notes render in place.
        """
        _, body = self._split_title_block(markdown_text)
        return self.markdown_processor.render(body)

    def parse_document(self, markdown_text: str) -> Document:
        """
        Parse a deck source into metadata and slides.

        Args:
            markdown_text: Raw markdown content

        Returns:
            Document with one Slide per separator-delimited block

        Raises:
            ConversionError: If the header block is malformed
        """
        metadata, body = self._split_title_block(markdown_text)

        env: Dict[str, Any] = {}
        tokens = self.markdown_processor.parse(body, env)

        groups: List[List[Token]] = [[]]
        for token in tokens:
            if token.type == "front_matter":
                metadata = self.parse_header(token.content)
            elif self._is_separator(token):
                groups.append([])
            else:
                groups[-1].append(token)

        slides = [self._build_slide(index, group, env) for index, group in enumerate(groups)]
        logger.debug("Parsed %d slide(s); title=%r", len(slides), metadata.title)
        return Document(metadata=metadata, slides=slides)

    def parse_with_page_breaks(self, markdown_text: str) -> List[str]:
        """
        Parse markdown text and split on slide separators.

        Returns:
            List of HTML strings, one per slide, empty slides included
        """
        return [slide.html for slide in self.parse_document(markdown_text).slides]

    def count_page_breaks(self, markdown_text: str) -> int:
        """
        Count the slide separators in markdown text.

        Only top-level horizontal rules count; rules inside code, lists or
        quotes do not, and neither does the header block.
        """
        _, body = self._split_title_block(markdown_text)
        tokens = self.markdown_processor.parse(body, {})
        return sum(1 for token in tokens if self._is_separator(token))

    def estimate_slide_count(self, markdown_text: str) -> int:
        """Number of slides the document renders to (separators + 1)."""
        return self.count_page_breaks(markdown_text) + 1

    # ------------------------------------------------------------------
    # Header block
    # ------------------------------------------------------------------

    def parse_header(self, header_text: str) -> Metadata:
        """
        Parse the YAML header block.

        Scalars are loaded with ``BaseLoader`` so they stay the exact strings
        written (``date: 2020-05-01`` is not turned into a date).

        Raises:
            ConversionError: If the YAML is invalid or its root is not a mapping
        """
        try:
            data = yaml.load(header_text, Loader=yaml.BaseLoader)
        except yaml.YAMLError as exc:
            raise ConversionError(f"malformed header block: {exc}") from exc

        if data is None or data == "":
            return Metadata()
        if not isinstance(data, dict):
            raise ConversionError(
                f"malformed header block: expected key/value pairs, got {type(data).__name__}"
            )

        extra = {k: v for k, v in data.items() if k not in ("title", "author", "date")}
        return Metadata(
            title=self._scalar("title", data.get("title")),
            authors=self._authors(data.get("author")),
            date=self._scalar("date", data.get("date")),
            extra=extra,
        )

    def _split_title_block(self, markdown_text: str) -> Tuple[Metadata, str]:
        """Strip a pandoc ``%`` title block from the top of the document."""
        lines = markdown_text.split("\n")
        fields: List[str] = []
        while len(fields) < min(3, len(lines)) and lines[len(fields)].startswith("%"):
            fields.append(lines[len(fields)][1:].strip())
        if not fields:
            return Metadata(), self._guard_leading_rule(markdown_text)

        body = self._guard_leading_rule("\n".join(lines[len(fields):]))
        title, authors, date = fields + [""] * (3 - len(fields))
        metadata = Metadata(
            title=title or None,
            authors=[a.strip() for a in authors.split(";") if a.strip()],
            date=date or None,
        )
        return metadata, body

    @staticmethod
    def _guard_leading_rule(body: str) -> str:
        """
        Keep a leading rule followed by a blank line out of the header block.

        As in pandoc, ``---`` on the first line opens YAML metadata only when
        the next line has content. Otherwise it is a slide separator; a
        leading newline stops front_matter_plugin from claiming it.
        """
        first, _, rest = body.partition("\n")
        marker = first.rstrip()
        if len(marker) >= 3 and set(marker) == {"-"}:
            next_line = rest.split("\n", 1)[0]
            if not next_line.strip():
                return "\n" + body
        return body

    @staticmethod
    def _scalar(key: str, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        if isinstance(value, (dict, list)):
            raise ConversionError(f"malformed header block: '{key}' must be a single value")
        return str(value)

    @staticmethod
    def _authors(value: Any) -> List[str]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            authors = []
            for item in value:
                # pandoc also allows `- name: Jane` entries
                if isinstance(item, dict):
                    item = item.get("name")
                if isinstance(item, str) and item:
                    authors.append(item)
            return authors
        if isinstance(value, dict) and isinstance(value.get("name"), str):
            return [value["name"]]
        raise ConversionError("malformed header block: 'author' must be a name or a list of names")

    # ------------------------------------------------------------------
    # Slides
    # ------------------------------------------------------------------

    @staticmethod
    def _is_separator(token: Token) -> bool:
        return token.type == "hr" and token.level == 0

    def _build_slide(self, index: int, tokens: Sequence[Token], env: Dict[str, Any]) -> Slide:
        slide = Slide(index=index)
        body: List[Token] = []
        note_tokens: List[Token] = []
        notes_depth = 0

        for token in tokens:
            if token.type == NOTES_OPEN:
                notes_depth += 1
                if notes_depth == 1:
                    note_tokens = []
                    continue
            elif token.type == NOTES_CLOSE:
                notes_depth -= 1
                if notes_depth == 0:
                    slide.notes.append(self._render(note_tokens, env))
                    continue

            if notes_depth:
                note_tokens.append(token)
            elif token.type == "speaker_note":
                slide.notes.append(self.markdown_processor.renderInline(token.content))
            else:
                body.append(token)

        for token in body:
            if token.type == "heading_open" and slide.slide_id is None:
                # Move the first heading's anchor onto the slide element
                slide_id = token.attrs.pop("id", None)
                slide.slide_id = str(slide_id) if slide_id else None
            elif token.type == "fence":
                language = self._fence_language(token)
                if language:
                    slide.code_languages.append(language)
            elif token.type == "inline":
                slide.images.extend(self._collect_images(token, index))

        slide.html = self._render(body, env)
        logger.debug(
            "Slide %d: id=%s notes=%d code=%s images=%d",
            index, slide.slide_id, len(slide.notes), slide.code_languages, len(slide.images),
        )
        return slide

    def _render(self, tokens: Sequence[Token], env: Dict[str, Any]) -> str:
        md = self.markdown_processor
        return md.renderer.render(list(tokens), md.options, env)

    @staticmethod
    def _fence_language(token: Token) -> Optional[str]:
        info = token.info.strip()
        if not info:
            return None
        if info.startswith("{"):
            match = _FENCE_ATTR_CLASS.match(info)
            # Rewrite so the renderer emits class="language-<tag>"
            token.info = match.group(1) if match else ""
            info = token.info
        return info.split()[0] if info else None

    def _collect_images(self, token: Token, slide_index: int) -> List[str]:
        sources = []
        for child in token.children or []:
            if child.type != "image":
                continue
            src = str(child.attrGet("src") or "")
            sources.append(src)
            try:
                local = resolve_asset(src, base_dir=self.base_dir) if src else None
                missing = local is not None and not local.exists()
            except (OSError, ValueError) as exc:
                logger.warning("Slide %d has an unusable image path %.80s: %s", slide_index + 1, src, exc)
                continue
            if missing:
                logger.warning("Slide %d references missing image: %s", slide_index + 1, src)
        return sources
