"""
Unit tests for expression decoding and traversal parsing.
"""

import pytest

from earlydecoder.hcl import (
    ObjectExpr, TraverseAttr, TraverseIndex, TraverseRoot, abs_traversal_for_expr,
    decode_string, parse_traversal_abs,
)

from tests.builders import at, lit, ref, template


class TestDecodeString:
    """Test static string decoding."""

    @pytest.mark.parametrize("value,expected", [
        ("~> 1.2", "~> 1.2"),
        ("", ""),
        (3, "3"),
        (2.0, "2"),
        (1.5, "1.5"),
        (True, "true"),
        (False, "false"),
    ])
    def test_primitives(self, value, expected):
        result, diags = decode_string(lit(value))
        assert result == expected
        assert len(diags) == 0

    @pytest.mark.parametrize("value,summary", [
        (None, "Null value"),
        ({"a": "b"}, "Unsuitable value type"),
        (["a"], "Unsuitable value type"),
    ])
    def test_non_strings(self, value, summary):
        result, diags = decode_string(lit(value))
        assert result is None
        assert [d.summary for d in diags] == [summary]

    def test_references_are_not_static(self):
        expr_range = at(4)
        for expr in (ref("var.x", expr_range), template("v${var.x}", expr_range)):
            result, diags = decode_string(expr)
            assert result is None
            assert len(diags) == 1
            assert diags[0].summary == "Variables not allowed"
            assert diags[0].subject == expr_range

    def test_object_with_dynamic_member(self):
        expr = ObjectExpr(items={"a": ref("var.x")}, range=at(2))
        result, diags = decode_string(expr)
        assert result is None
        assert [d.summary for d in diags] == ["Unsuitable value type"]
        assert diags[0].subject == at(2)


class TestAbsTraversalForExpr:

    def test_reference(self):
        traversal, diags = abs_traversal_for_expr(ref("aws.east"))
        assert len(diags) == 0
        assert str(traversal) == "aws.east"

    @pytest.mark.parametrize("expr", [lit("aws.east"), lit(1), template("${a}${b}")])
    def test_other_expressions(self, expr):
        traversal, diags = abs_traversal_for_expr(expr)
        assert traversal is None
        assert diags.has_errors()


class TestParseTraversalAbs:
    """Test parsing traversal source text."""

    def test_attribute_steps(self):
        traversal, diags = parse_traversal_abs("aws.east")
        assert len(diags) == 0
        assert traversal.steps == (TraverseRoot(name="aws"), TraverseAttr(name="east"))
        assert traversal.root_name() == "aws"

    def test_index_steps(self):
        traversal, diags = parse_traversal_abs('foo[0]["bar"].baz.1')
        assert len(diags) == 0
        assert traversal.steps == (
            TraverseRoot(name="foo"),
            TraverseIndex(key=0),
            TraverseIndex(key="bar"),
            TraverseAttr(name="baz"),
            TraverseIndex(key=1),
        )
        assert str(traversal) == 'foo[0]["bar"].baz[1]'

    def test_dashes_in_names(self):
        traversal, diags = parse_traversal_abs("google-beta.us-east1")
        assert len(diags) == 0
        assert traversal.root_name() == "google-beta"
        assert traversal[1] == TraverseAttr(name="us-east1")

    @pytest.mark.parametrize("text,summary", [
        ("", "Variable name required"),
        ("   ", "Variable name required"),
        ("1abc", "Variable name required"),
        (".aws", "Variable name required"),
        ("aws.", "Invalid traversal"),
        ("aws east", "Invalid traversal"),
        ("aws + 1", "Invalid traversal"),
        ("aws[var]", "Invalid traversal"),
    ])
    def test_invalid(self, text, summary):
        traversal, diags = parse_traversal_abs(text, "x.tf")
        assert traversal is None
        assert [d.summary for d in diags] == [summary]
        assert diags[0].subject.filename == "x.tf"
