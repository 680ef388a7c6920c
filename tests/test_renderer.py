"""Tests for prompt template rendering."""

from structai.prompting import render


class TestRender:
    """Tests for placeholder substitution."""

    def test_replaces_known_placeholder(self) -> None:
        """Known placeholders should be replaced by their values."""
        assert render("Hello {{name}}!", {"name": "Ada"}) == "Hello Ada!"

    def test_replaces_every_occurrence(self) -> None:
        """All occurrences of a placeholder should be replaced, not just the first."""
        result = render("{{x}} and {{x}} and {{x}}", {"x": "1"})

        assert result == "1 and 1 and 1"

    def test_unknown_placeholder_left_verbatim(self) -> None:
        """Placeholders without a variable stay in the output unchanged."""
        result = render("Hi {{name}}, from {{team}}", {"team": "ops"})

        assert result == "Hi {{name}}, from ops"

    def test_empty_variables_returns_template(self) -> None:
        """No variables means no substitution."""
        template = "Hello {{name}}"

        assert render(template, {}) == template
        assert render(template, None) == template

    def test_empty_template_returned_unchanged(self) -> None:
        """Empty or missing templates pass through."""
        assert render("", {"a": "b"}) == ""
        assert render(None, {"a": "b"}) is None

    def test_substitution_is_not_recursive(self) -> None:
        """Values containing placeholders are not re-scanned."""
        result = render("{{a}} {{b}}", {"a": "{{b}}", "b": "done"})

        assert result == "{{b}} done"

    def test_multiline_values(self) -> None:
        """Values may span multiple lines."""
        result = render("<doc>\n{{body}}\n</doc>", {"body": "line 1\nline 2"})

        assert result == "<doc>\nline 1\nline 2\n</doc>"

    def test_extra_braces_around_placeholder(self) -> None:
        """A placeholder preceded by stray braces is still found."""
        assert render("{{{{a}}", {"a": "x"}) == "{{x"

    def test_unterminated_placeholder_left_alone(self) -> None:
        """An opening marker without a close is not treated as a placeholder."""
        assert render("{{a} and {{a}}", {"a": "x"}) == "{{a} and x"
