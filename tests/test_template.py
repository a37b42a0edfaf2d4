"""Tests for placeholder rendering and ERB rewriting."""

from __future__ import annotations

import unittest

from dropkick.errors import TemplateRenderError
from dropkick.template import format_value, render_template, rewrite_erb_placeholders


class RewriteErbTests(unittest.TestCase):
    def test_rewrites_with_varied_whitespace(self) -> None:
        source = "<%= config[:name] %>|<%=config[ :pascal_name ]%>|<%=  config[:bin] -%>"
        self.assertEqual(rewrite_erb_placeholders(source), "{{ name }}|{{ pascal_name }}|{{ bin }}")

    def test_other_erb_is_untouched(self) -> None:
        source = "<% if config[:test] %>x<% end %>"
        self.assertEqual(rewrite_erb_placeholders(source), source)


class RenderTemplateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.context = {
            "name": "demo",
            "test": True,
            "bin": False,
            "constant_array": ["Foo", "Bar"],
        }

    def test_substitutes_native_and_erb_placeholders(self) -> None:
        rendered = render_template("# {{ name }}\n<%= config[:name] %>\n", self.context)
        self.assertEqual(rendered, "# demo\ndemo\n")

    def test_booleans_and_lists(self) -> None:
        rendered = render_template("{{test}} {{ bin }} {{ constant_array }}", self.context)
        self.assertEqual(rendered, "true false Foo, Bar")

    def test_index_access(self) -> None:
        self.assertEqual(render_template("{{ constant_array.1 }}", self.context), "Bar")

    def test_missing_field_raises_with_name(self) -> None:
        with self.assertRaises(TemplateRenderError) as ctx:
            render_template("hello {{ nope }}", self.context)
        self.assertEqual(ctx.exception.field, "nope")
        self.assertIn("nope", str(ctx.exception))

    def test_out_of_range_index_raises(self) -> None:
        with self.assertRaises(TemplateRenderError):
            render_template("{{ constant_array.5 }}", self.context)

    def test_non_placeholder_braces_are_left_intact(self) -> None:
        source = "fn main() { let x = {a: 1}; }\n{{ }}\n${{ 1 + 2 }}"
        self.assertEqual(render_template(source, self.context), source)

    def test_format_value(self) -> None:
        self.assertEqual(format_value(3), "3")
        self.assertEqual(format_value(("a", "b")), "a, b")


if __name__ == "__main__":
    unittest.main()
