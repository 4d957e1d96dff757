"""
HCL expressions and traversals.

Only the small part of HCL expression semantics the early decoder needs is
modelled here: static literals, bare references (absolute traversals) and
anything else, which is kept as opaque template source. An object with
dynamic members keeps each member, so its static members stay decodable.
"""

import re
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..diagnostics import Diagnostics, Pos, Range, error


# =============================================================================
# Traversals
# =============================================================================

class TraverseRoot(BaseModel):
    """The leading name of a traversal, e.g. ``aws`` in ``aws.east``."""
    model_config = ConfigDict(frozen=True)
    name: str


class TraverseAttr(BaseModel):
    """An attribute access step, e.g. ``.east``."""
    model_config = ConfigDict(frozen=True)
    name: str


class TraverseIndex(BaseModel):
    """An index step, e.g. ``[0]`` or ``["key"]``."""
    model_config = ConfigDict(frozen=True)
    key: Union[int, str]


TraversalStep = Union[TraverseRoot, TraverseAttr, TraverseIndex]


class Traversal(BaseModel):
    """An absolute traversal: a root name followed by zero or more steps."""

    model_config = ConfigDict(frozen=True)

    steps: Tuple[TraversalStep, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index):
        return self.steps[index]

    def root_name(self) -> str:
        if not self.steps or not isinstance(self.steps[0], TraverseRoot):
            return ""
        return self.steps[0].name

    def __str__(self) -> str:
        parts = []
        for step in self.steps:
            if isinstance(step, TraverseRoot):
                parts.append(step.name)
            elif isinstance(step, TraverseAttr):
                parts.append(f".{step.name}")
            elif isinstance(step.key, int):
                parts.append(f"[{step.key}]")
            else:
                parts.append(f'["{step.key}"]')
        return "".join(parts)


# =============================================================================
# Expressions
# =============================================================================

class Expression(BaseModel):
    """Base class for expression handles attached to attributes."""
    model_config = ConfigDict(frozen=True)
    range: Range = Range()


class LiteralExpr(Expression):
    """A statically known value: string, number, bool, null, or a collection of those."""
    value: Any = None


class TraversalExpr(Expression):
    """A bare reference such as ``aws.east``."""
    traversal: Traversal


class TemplateExpr(Expression):
    """Any other expression (interpolations, function calls, operators)."""
    source: str = ""


class ObjectExpr(Expression):
    """An object constructor whose members are not all static."""
    items: Dict[str, Expression] = Field(default_factory=dict)


def decode_string(expr: Expression) -> Tuple[Optional[str], Diagnostics]:
    """
    Decode an expression as a static string.

    Primitive literals convert to strings the way HCL converts them (numbers
    in their shortest form, booleans as ``true``/``false``). Anything that
    needs an evaluation context fails.

    Returns:
        The decoded string (or None) and any diagnostics
    """
    if isinstance(expr, (TraversalExpr, TemplateExpr)):
        return None, Diagnostics([error(
            "Variables not allowed",
            "Variables may not be used here.",
            expr.range,
        )])

    if isinstance(expr, ObjectExpr):
        return None, Diagnostics([error(
            "Unsuitable value type",
            "Unsuitable value: string required.",
            expr.range,
        )])

    if not isinstance(expr, LiteralExpr):
        return None, Diagnostics([error(
            "Invalid expression",
            "A static value is required here.",
            expr.range,
        )])

    value = expr.value
    if value is None:
        return None, Diagnostics([error(
            "Null value",
            "A null value is not allowed here; a string is required.",
            expr.range,
        )])
    if isinstance(value, str):
        return value, Diagnostics()
    if isinstance(value, bool):
        return ("true" if value else "false"), Diagnostics()
    if isinstance(value, int):
        return str(value), Diagnostics()
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value)), Diagnostics()
        return repr(value), Diagnostics()

    return None, Diagnostics([error(
        "Unsuitable value type",
        "Unsuitable value: string required.",
        expr.range,
    )])


def abs_traversal_for_expr(expr: Expression) -> Tuple[Optional[Traversal], Diagnostics]:
    """Interpret an expression as a bare absolute traversal."""
    if isinstance(expr, TraversalExpr) and len(expr.traversal) > 0:
        return expr.traversal, Diagnostics()
    return None, Diagnostics([error(
        "Invalid expression",
        "A single static variable reference is required: only attribute access "
        "and indexing with constant keys. No calculations, function calls, "
        "template expressions, etc are allowed here.",
        expr.range,
    )])


_IDENT = r"[A-Za-z_][A-Za-z0-9_-]*"
_ROOT_RE = re.compile(_IDENT)
_STEP_RES = (
    ("attr", re.compile(r"\.\s*(" + _IDENT + r")")),
    ("legacy_index", re.compile(r"\.\s*([0-9]+)")),
    ("number_index", re.compile(r"\[\s*([0-9]+)\s*\]")),
    ("string_index", re.compile(r'\[\s*"((?:[^"\\]|\\.)*)"\s*\]')),
)


def parse_traversal_abs(text: str, filename: str = "") -> Tuple[Optional[Traversal], Diagnostics]:
    """
    Parse source text as an absolute traversal, e.g. ``aws.east``.

    Args:
        text: Text holding the traversal; surrounding whitespace is ignored
        filename: Filename used for diagnostic ranges

    Returns:
        The parsed traversal (or None) and any diagnostics
    """
    def _range(offset: int) -> Range:
        pos = Pos(line=1, column=offset + 1, byte=offset)
        return Range(filename=filename, start=pos, end=pos)

    pos = len(text) - len(text.lstrip())
    end = len(text.rstrip())

    root = _ROOT_RE.match(text, pos, end)
    if root is None:
        return None, Diagnostics([error(
            "Variable name required",
            "Must begin with a variable name.",
            _range(pos),
        )])

    steps = [TraverseRoot(name=root.group(0))]
    pos = root.end()

    while pos < end:
        for kind, pattern in _STEP_RES:
            match = pattern.match(text, pos, end)
            if match is None:
                continue
            if kind == "attr":
                steps.append(TraverseAttr(name=match.group(1)))
            elif kind == "string_index":
                steps.append(TraverseIndex(key=match.group(1)))
            else:
                steps.append(TraverseIndex(key=int(match.group(1))))
            pos = match.end()
            break
        else:
            return None, Diagnostics([error(
                "Invalid traversal",
                "Only attribute access and indexing with constant keys are "
                "allowed after the variable name.",
                _range(pos),
            )])

    return Traversal(steps=tuple(steps)), Diagnostics()
