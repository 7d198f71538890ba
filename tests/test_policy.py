"""Tests for the highlight eligibility policy."""

from __future__ import annotations

import pytest

from jinjahl import highlight
from jinjahl.config import HighlightConfig
from jinjahl.policy import is_eligible
from jinjahl.tokens import Category

ALL_OFF = HighlightConfig(False, False)


class TestTemplateFiles:
    @pytest.mark.parametrize("path", ["page.jinja", "conf.j2", "/srv/mail.jinja2"])
    def test_always_eligible(self, path: str) -> None:
        assert is_eligible(path, "", HighlightConfig())
        assert is_eligible(path, "", ALL_OFF)

    def test_suffix_must_be_at_end(self) -> None:
        assert not is_eligible("notes.j2.bak", "", HighlightConfig())


class TestTextFiles:
    def test_enabled_by_default(self) -> None:
        assert is_eligible("report.txt", "", HighlightConfig())

    def test_plaintext_kind(self) -> None:
        assert is_eligible("untitled-1", "plaintext", HighlightConfig())

    @pytest.mark.parametrize(
        ("general", "highlighting"),
        [(False, True), (True, False), (False, False)],
    )
    def test_both_switches_required(self, general: bool, highlighting: bool) -> None:
        cfg = HighlightConfig(general, highlighting)
        assert not is_eligible("report.txt", "", cfg)
        assert not is_eligible("untitled-1", "plaintext", cfg)


class TestOtherFiles:
    def test_not_eligible(self) -> None:
        assert not is_eligible("index.html", "html", HighlightConfig())

    def test_absent_document(self) -> None:
        assert not is_eligible(None, None, HighlightConfig())


class TestHighlightEntryPoint:
    SOURCE = "{% if x %}{{ x }}{% endif %}"

    def test_text_file_disabled_yields_nothing(self) -> None:
        result = highlight(self.SOURCE, "report.txt", config=HighlightConfig(False, True))
        assert all(spans == [] for spans in result.values())

    def test_text_file_enabled_yields_tokens(self) -> None:
        result = highlight(self.SOURCE, "report.txt", config=HighlightConfig(True, True))
        assert len(result[Category.KEYWORD]) == 2

    def test_template_ignores_switches(self) -> None:
        result = highlight(self.SOURCE, "template.j2", config=ALL_OFF)
        assert len(result[Category.DELIMITER]) == 6
