"""Helpers for building in-memory HCL documents in tests."""

from earlydecoder.diagnostics import Pos, Range
from earlydecoder.hcl import (
    Attribute, Block, Expression, LiteralExpr, StaticBody, TemplateExpr,
    TraversalExpr, parse_traversal_abs,
)


def at(line: int, filename: str = "main.tf") -> Range:
    return Range(filename=filename, start=Pos(line=line, column=1), end=Pos(line=line, column=20))


def lit(value, range: Range = Range()) -> LiteralExpr:
    return LiteralExpr(value=value, range=range)


def ref(text: str, range: Range = Range()) -> TraversalExpr:
    traversal, diags = parse_traversal_abs(text)
    assert not diags.has_errors()
    return TraversalExpr(traversal=traversal, range=range)


def template(source: str, range: Range = Range()) -> TemplateExpr:
    return TemplateExpr(source=source, range=range)


def attr(name: str, value) -> Attribute:
    expr = value if isinstance(value, Expression) else lit(value)
    return Attribute(name=name, expr=expr, range=expr.range)


def block(type: str, *labels: str, attrs=None, blocks=None, range: Range = Range()) -> Block:
    return Block(
        type=type,
        labels=list(labels),
        body=StaticBody(
            attributes=[attr(k, v) for k, v in (attrs or {}).items()],
            blocks=list(blocks or []),
            range=range,
        ),
        def_range=range,
    )


def body(*blocks: Block, attrs=None) -> StaticBody:
    return StaticBody(
        attributes=[attr(k, v) for k, v in (attrs or {}).items()],
        blocks=list(blocks),
    )
