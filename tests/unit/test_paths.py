"""Test file-system helpers."""
import os
import stat
from pathlib import Path

import pytest
from deck_renderer.errors import ConversionError, NotFoundError
from deck_renderer.paths import read_source, resolve_asset, resolve_output_path, write_output


def test_read_source(tmp_path):
    src = tmp_path / "deck.md"
    src.write_text("# Hi ✅", encoding="utf-8")

    assert read_source(src) == "# Hi ✅"


def test_read_source_missing(tmp_path):
    with pytest.raises(NotFoundError) as excinfo:
        read_source(tmp_path / "missing.md")

    assert excinfo.value.path == tmp_path / "missing.md"


def test_resolve_output_path_default(tmp_path):
    assert resolve_output_path(tmp_path / "presentation.md") == tmp_path / "presentation.html"
    assert resolve_output_path("deck.md", tmp_path / "x.html") == tmp_path / "x.html"


def test_write_output_replaces_atomically(tmp_path):
    target = tmp_path / "out.html"
    target.write_text("old", encoding="utf-8")

    write_output(target, "new\n")

    assert target.read_text(encoding="utf-8") == "new\n"
    # no temporary files left behind
    assert [p.name for p in tmp_path.iterdir()] == ["out.html"]


def test_write_output_failure_keeps_nothing(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ConversionError):
        write_output(blocker / "out.html", "x")

    assert [p.name for p in tmp_path.iterdir()] == ["blocker"]


def test_resolve_asset_rules(tmp_path):
    assert resolve_asset("https://example.com/a.png", base_dir=tmp_path) is None
    assert resolve_asset("data:image/png;base64,AAAA", base_dir=tmp_path) is None
    assert resolve_asset("img/a.png", base_dir=tmp_path) == (tmp_path / "img" / "a.png").resolve()
    assert resolve_asset("file:///tmp/a.png", base_dir=tmp_path) == Path("/tmp/a.png").resolve()


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)


def test_write_output_uses_umask_mode(tmp_path, umask_022):
    """New files get the usual 0o666 & ~umask permissions, not mkstemp's 0o600."""
    target = tmp_path / "out.html"

    write_output(target, "x")

    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_write_output_keeps_existing_mode(tmp_path, umask_022):
    target = tmp_path / "out.html"
    target.write_text("old", encoding="utf-8")
    target.chmod(0o640)

    write_output(target, "new")

    assert stat.S_IMODE(target.stat().st_mode) == 0o640
