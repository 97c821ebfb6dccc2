"""Tests for the Jinja2 placeholder renderer and bundled template loading."""

import jinja2
import pytest

from issue_cards.templates.template_renderer import fill_placeholders, read_packaged_template, render_text


class TestRenderText:

    def test_substitutes_placeholders(self):
        assert render_text("Test {{component}} in {{scope}}", component="Auth", scope="login") == "Test Auth in login"

    def test_missing_value_raises(self):
        with pytest.raises(jinja2.UndefinedError):
            render_text("Test {{component}}")

    def test_does_not_escape_markup(self):
        assert render_text("{{x}}", x="<b>&</b>") == "<b>&</b>"


class TestReadPackagedTemplate:

    def test_reads_issue_template(self):
        assert "## Tasks" in read_packaged_template("feature", "issue")

    def test_missing_template_raises_error(self):
        with pytest.raises(FileNotFoundError):
            read_packaged_template("nonexistent", "tag")

    def test_invalid_kind(self):
        with pytest.raises(ValueError):
            read_packaged_template("feature", "epic")


class TestFillPlaceholders:

    def test_fills_hyphenated_keys(self):
        assert fill_placeholders("Write {{ test-type }} tests", {"test-type": "unit"}) == "Write unit tests"

    def test_leaves_other_braces_alone(self):
        assert fill_placeholders("{% raw %} {#x#} {{a}}", {"a": "1"}) == "{% raw %} {#x#} 1"

    def test_missing_value_raises(self):
        with pytest.raises(KeyError):
            fill_placeholders("Needs {{missing}}", {})
