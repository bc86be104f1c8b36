"""Tests for the template serializer.

The evaluator relies on serialize() to rewrite bare directives, so a
serialized template must parse back to the same directives.
"""

from __future__ import annotations

from hypothesis import given

from fakerengine.syntax import (
    Directive,
    Template,
    TextElement,
    parse_template,
    serialize,
    serialize_argument,
    serialize_directive,
)
from tests.strategies import directives, template_sources


class TestSerializeArgument:
    """Test argument rendering."""

    def test_bool(self) -> None:
        """Booleans render as keywords."""
        assert serialize_argument(True) == "true"
        assert serialize_argument(False) == "false"

    def test_numbers(self) -> None:
        """Numbers render as written."""
        assert serialize_argument(-12) == "-12"
        assert serialize_argument(2.5) == "2.5"

    def test_string_quoted_and_escaped(self) -> None:
        """Strings are double-quoted with escapes."""
        assert serialize_argument('say "hi"\n') == '"say \\"hi\\"\\n"'

    def test_backslash_escaped(self) -> None:
        """Backslashes are doubled."""
        assert serialize_argument("\\d") == '"\\\\d"'


class TestSerializeDirective:
    """Test directive rendering."""

    def test_without_arguments(self) -> None:
        """No parentheses when there are no arguments."""
        assert serialize_directive(Directive(path=("Address", "city"))) == "#{Address.city}"

    def test_with_arguments(self) -> None:
        """Arguments are comma separated."""
        directive = Directive(path=("bothify",), arguments=("??-##", "upper"))
        assert serialize_directive(directive) == '#{bothify("??-##", "upper")}'

    def test_template(self) -> None:
        """Text and directives are concatenated in order."""
        template = Template(
            (Directive(path=("name", "first_name")), TextElement(" & "), Directive(path=("x",)))
        )
        assert serialize(template) == "#{name.first_name} & #{x}"


class TestSerializerProperties:
    """Property tests: parse(serialize(x)) preserves meaning."""

    @given(directive=directives())
    def test_directive_survives_round_trip(self, directive: Directive) -> None:
        """PROPERTY: path and arguments survive serialization."""
        (parsed,) = parse_template(serialize_directive(directive)).elements
        assert isinstance(parsed, Directive)
        assert parsed.path == directive.path
        assert parsed.arguments == directive.arguments

    @given(source=template_sources())
    def test_serialize_is_stable(self, source: str) -> None:
        """PROPERTY: serializing a parsed template is a fixed point."""
        once = serialize(parse_template(source))
        assert serialize(parse_template(once)) == once
