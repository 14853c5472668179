#!/usr/bin/env python3
"""Utility helpers for reading the source and writing the presentation.

This module is the single place where the renderer touches the file system.
The output is written to a temporary file next to the destination and then
renamed over it, so a failed conversion never leaves a half-written
presentation behind.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from .errors import ConversionError, NotFoundError

logger = logging.getLogger(__name__)

__all__ = ["read_source", "resolve_output_path", "write_output", "resolve_asset"]


def read_source(path: str | Path) -> str:
    """Return the UTF-8 text of the markdown source at *path*.

    Raises
    ------
    NotFoundError
        The file does not exist.
    ConversionError
        The path exists but is not a readable UTF-8 file.
    """
    src = Path(path).expanduser()
    if not src.exists():
        raise NotFoundError(src)
    if src.is_dir():
        raise ConversionError("is a directory, expected a markdown file", path=src)

    try:
        return src.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConversionError(f"not valid UTF-8 ({exc.reason})", path=src) from exc
    except OSError as exc:
        raise ConversionError(f"cannot read source: {exc.strerror or exc}", path=src) from exc


def resolve_output_path(input_path: str | Path, output_path: str | Path | None = None) -> Path:
    """Destination for the presentation; defaults to the input with a ``.html`` suffix."""
    if output_path is None:
        return Path(input_path).expanduser().with_suffix(".html")
    return Path(output_path).expanduser()


def _output_mode(target: Path) -> int:
    """Mode for the written file: keep an existing target's, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        pass
    # mkstemp creates 0o600 files; os.umask is the only way to read the mask
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_output(path: str | Path, text: str) -> Path:
    """Atomically write *text* to *path*, creating parent directories.

    Raises
    ------
    ConversionError
        Any file-system failure (permissions, full disk, ...). The
        destination is left untouched in that case.
    """
    target = Path(path)
    tmp_name: Optional[str] = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            os.chmod(tmp_name, _output_mode(target))
            fh.write(text)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as exc:
        raise ConversionError(f"cannot write output: {exc.strerror or exc}", path=target) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug("Wrote %d characters to %s", len(text), target)
    return target


def resolve_asset(src: str, *, base_dir: Path) -> Optional[Path]:
    """Return the local file an image reference points at, or ``None``.

    Rules
    -----
    1. Remote or data-URIs are not local: ``None``.
    2. ``file://`` URLs are stripped to an absolute path first.
    3. Relative paths are resolved against *base_dir*.
    """
    if src.startswith(("http://", "https://", "data:", "//")):
        return None

    if src.startswith("file://"):
        return Path(src[7:]).expanduser().resolve()

    return (Path(base_dir) / src).expanduser().resolve()
