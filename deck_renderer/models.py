"""
Data models for the deck renderer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Metadata:
    """
    Document metadata declared in the header block.

    Values are kept exactly as written in the source.
    """
    title: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    date: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def author(self) -> Optional[str]:
        """All authors joined for single-value contexts."""
        return ", ".join(self.authors) if self.authors else None


@dataclass
class Slide:
    """
    One slide of the deck, in source order.
    """
    index: int
    html: str = ""
    slide_id: Optional[str] = None  # anchor of the first heading
    notes: List[str] = field(default_factory=list)  # rendered speaker notes
    code_languages: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)  # image src values

    @property
    def is_empty(self) -> bool:
        return not self.html.strip()

    @property
    def notes_html(self) -> str:
        return "".join(self.notes)


@dataclass
class Document:
    """A parsed source document: metadata plus ordered slides."""
    metadata: Metadata = field(default_factory=Metadata)
    slides: List[Slide] = field(default_factory=list)

    @property
    def slide_count(self) -> int:
        return len(self.slides)
