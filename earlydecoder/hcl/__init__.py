"""
earlydecoder HCL layer

An in-memory model of parsed HCL documents: bodies, blocks, attributes,
expressions and traversals, plus schema filtering and a python-hcl2 backed
parse front end.
"""

from .body import (
    Attribute, AttributeSchema, Block, BlockHeaderSchema, Body, BodyContent,
    BodySchema, Hcl2Body, StaticBody, expression_from_hcl2,
)
from .expressions import (
    Expression, LiteralExpr, ObjectExpr, TemplateExpr, Traversal, TraversalExpr,
    TraverseAttr, TraverseIndex, TraverseRoot, abs_traversal_for_expr,
    decode_string, parse_traversal_abs,
)
from .parser import parse_file, parse_string

__all__ = [
    "Attribute",
    "AttributeSchema",
    "Block",
    "BlockHeaderSchema",
    "Body",
    "BodyContent",
    "BodySchema",
    "Hcl2Body",
    "StaticBody",
    "expression_from_hcl2",
    "Expression",
    "LiteralExpr",
    "ObjectExpr",
    "TemplateExpr",
    "Traversal",
    "TraversalExpr",
    "TraverseAttr",
    "TraverseIndex",
    "TraverseRoot",
    "abs_traversal_for_expr",
    "decode_string",
    "parse_traversal_abs",
    "parse_file",
    "parse_string",
]
