#!/usr/bin/env python3
"""
Command-line interface: exit codes and option handling.
"""
import logging

import pytest
from bs4 import BeautifulSoup

from deck_renderer.generator import main


@pytest.fixture
def deck(tmp_path):
    src = tmp_path / "presentation.md"
    src.write_text("---\ntitle: Talk\n---\n\n# One\n\n---\n\n# Two\n", encoding="utf-8")
    return src


def test_cli_renders_with_asset_base_url(deck, tmp_path):
    out = tmp_path / "presentation.html"
    url = "https://cdn.example.org/reveal.js/3.9.2"

    code = main([str(deck), "--to=slides", f"--output={out}", f"--asset-base-url={url}"])

    assert code == 0
    html = out.read_text(encoding="utf-8")
    assert f'href="{url}/css/reveal.css"' in html
    assert len(BeautifulSoup(html, "html.parser").select("section.slide")) == 2


def test_cli_default_output_next_to_input(deck):
    assert main([str(deck)]) == 0
    assert deck.with_suffix(".html").exists()


def test_cli_pandoc_style_variables(deck, tmp_path):
    out = tmp_path / "o.html"

    code = main([str(deck), "-t", "revealjs", "-o", str(out),
                 "-V", "revealjs-url=https://mirror.test/reveal", "-V", "theme=white"])

    assert code == 0
    html = out.read_text(encoding="utf-8")
    assert "https://mirror.test/reveal/css/theme/white.css" in html


def test_cli_flag_overrides_variable(deck, tmp_path):
    out = tmp_path / "o.html"

    main([str(deck), "-o", str(out), "-V", "theme=white", "--theme", "moon"])

    assert "/css/theme/moon.css" in out.read_text(encoding="utf-8")


def test_cli_no_title_slide(deck, tmp_path):
    out = tmp_path / "o.html"

    assert main([str(deck), "-o", str(out), "--no-title-slide"]) == 0
    assert 'id="title-slide"' not in out.read_text(encoding="utf-8")


def test_cli_missing_input_exits_nonzero(tmp_path, caplog):
    out = tmp_path / "o.html"

    assert main([str(tmp_path / "missing.md"), "-o", str(out)]) == 1
    assert not out.exists()
    assert "not found" in caplog.text


def test_cli_conversion_error_exits_nonzero(tmp_path):
    src = tmp_path / "bad.md"
    src.write_text("---\n- not\n- a mapping\n---\n", encoding="utf-8")

    assert main([str(src)]) == 1
    assert not src.with_suffix(".html").exists()


def test_cli_bad_theme_exits_nonzero(deck):
    assert main([str(deck), "--theme", "nonexistent"]) == 1
    assert not deck.with_suffix(".html").exists()


def test_cli_rejects_unknown_format(deck):
    with pytest.raises(SystemExit) as excinfo:
        main([str(deck), "--to=pptx"])

    assert excinfo.value.code == 2


def test_cli_reports_output_once(deck, caplog):
    with caplog.at_level(logging.INFO, logger="deck_renderer"):
        assert main([str(deck)]) == 0

    written = [r for r in caplog.records if "Presentation written" in r.getMessage()]
    assert len(written) == 1
