"""
Provider reference resolution for resource and data blocks.

A ``provider`` argument is normally a bare reference (``provider = aws.east``)
but older configurations quote it (``provider = "aws.east"``). Both forms are
accepted; the decode attempts are tried in order and the first one that
yields a traversal wins.
"""

from typing import Callable, List, Optional, Tuple

from .diagnostics import Diagnostics, error
from .hcl import (
    Attribute, Expression, Traversal, TraverseAttr, abs_traversal_for_expr,
    decode_string, parse_traversal_abs,
)
from .models import ProviderRef


def _bare_traversal(expr: Expression) -> Optional[Traversal]:
    traversal, diags = abs_traversal_for_expr(expr)
    if diags.has_errors():
        return None
    return traversal


def _quoted_traversal(expr: Expression) -> Optional[Traversal]:
    text, diags = decode_string(expr)
    if diags.has_errors():
        return None
    traversal, diags = parse_traversal_abs(text, expr.range.filename)
    if diags.has_errors():
        return None
    return traversal


PROVIDER_REFERENCE_DECODERS: List[Callable[[Expression], Optional[Traversal]]] = [
    _bare_traversal,
    _quoted_traversal,
]


def decode_provider_attribute(attr: Attribute) -> Tuple[ProviderRef, Diagnostics]:
    """
    Resolve a ``provider`` argument into a provider reference.

    Args:
        attr: The ``provider`` attribute of a resource or data block

    Returns:
        The reference and, when neither form could be decoded, a single
        "Invalid provider reference" error with an unresolved reference
    """
    for decoder in PROVIDER_REFERENCE_DECODERS:
        traversal = decoder(attr.expr)
        if traversal is not None and len(traversal) > 0:
            alias = ""
            if len(traversal) > 1 and isinstance(traversal[1], TraverseAttr):
                alias = traversal[1].name
            return ProviderRef(local_name=traversal.root_name(), alias=alias), Diagnostics()

    return ProviderRef(), Diagnostics([error(
        "Invalid provider reference",
        'Provider argument requires a provider name followed by an optional alias, like "aws.foo".',
        attr.expr.range,
    )])


def infer_provider_name_from_type(type_name: str) -> str:
    """Return the implied provider local name of a resource type, e.g. ``aws`` for ``aws_instance``."""
    return type_name.split("_", 1)[0]
