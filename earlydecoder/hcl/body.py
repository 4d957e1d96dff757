"""
HCL bodies, blocks, attributes and schema-driven content filtering.

Two body implementations share one interface:

- ``StaticBody`` is built directly from ``Attribute`` and ``Block`` objects.
- ``Hcl2Body`` wraps the dictionary that ``hcl2.loads`` produces and
  interprets it lazily, using the schema to decide how many levels of
  nesting are block labels.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..diagnostics import Diagnostics, Pos, Range, error
from .expressions import (
    Expression, LiteralExpr, ObjectExpr, TemplateExpr, TraversalExpr, parse_traversal_abs,
)


# =============================================================================
# Schema
# =============================================================================

class AttributeSchema(BaseModel):
    """An attribute the caller is interested in."""
    model_config = ConfigDict(frozen=True)
    name: str


class BlockHeaderSchema(BaseModel):
    """A nested block type and the names of its labels."""
    model_config = ConfigDict(frozen=True)
    type: str
    label_names: Tuple[str, ...] = ()


class BodySchema(BaseModel):
    """The shape a body is filtered against by ``partial_content``."""
    model_config = ConfigDict(frozen=True)
    attributes: Tuple[AttributeSchema, ...] = ()
    blocks: Tuple[BlockHeaderSchema, ...] = ()

    def attribute_names(self) -> List[str]:
        return [a.name for a in self.attributes]

    def block_types(self) -> List[str]:
        return [b.type for b in self.blocks]

    def block_header(self, block_type: str) -> Optional[BlockHeaderSchema]:
        for header in self.blocks:
            if header.type == block_type:
                return header
        return None


# =============================================================================
# Content
# =============================================================================

class Attribute(BaseModel):
    """A ``name = expression`` assignment inside a body."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    expr: Expression
    range: Range = Range()


class Block(BaseModel):
    """A typed, labelled block with a nested body."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: str
    labels: List[str] = Field(default_factory=list)
    body: "Body"
    def_range: Range = Range()


class BodyContent(BaseModel):
    """The attributes and blocks of a body that matched a schema."""
    attributes: Dict[str, Attribute] = Field(default_factory=dict)
    blocks: List[Block] = Field(default_factory=list)


class Body(ABC):
    """Interface every body implementation provides."""

    range: Range

    @abstractmethod
    def partial_content(self, body_schema: BodySchema) -> Tuple[BodyContent, Diagnostics]:
        """Return the attributes and blocks matching ``body_schema``, ignoring the rest."""

    @abstractmethod
    def just_attributes(self) -> Tuple[Dict[str, Attribute], Diagnostics]:
        """Return every attribute of the body, in declaration order."""


def _label_count_diagnostics(block_type: str, labels: List[str], header: BlockHeaderSchema,
                             subject: Range) -> Diagnostics:
    expected = len(header.label_names)
    if len(labels) < expected:
        names = ", ".join(header.label_names)
        return Diagnostics([error(
            f"Missing name for {block_type}",
            f"All {block_type} blocks must have {expected} labels ({names}).",
            subject,
        )])
    if len(labels) > expected:
        names = ", ".join(header.label_names)
        if expected == 0:
            detail = f"No labels are expected for {block_type} blocks."
        else:
            detail = f"Only {expected} labels ({names}) are expected for {block_type} blocks."
        return Diagnostics([error(f"Extraneous label for {block_type}", detail, subject)])
    return Diagnostics()


class StaticBody(Body):
    """A body assembled in memory from attributes and blocks."""

    def __init__(self, attributes: Optional[List[Attribute]] = None,
                 blocks: Optional[List[Block]] = None, range: Optional[Range] = None):
        self.attributes = list(attributes or [])
        self.blocks = list(blocks or [])
        self.range = range or Range()

    def partial_content(self, body_schema: BodySchema) -> Tuple[BodyContent, Diagnostics]:
        diags = Diagnostics()
        content = BodyContent()
        attr_names = body_schema.attribute_names()
        block_types = body_schema.block_types()

        for attr in self.attributes:
            if attr.name in attr_names:
                if attr.name in content.attributes:
                    diags.append(error(
                        "Duplicate argument",
                        f'The argument "{attr.name}" was already set at '
                        f'{content.attributes[attr.name].range}. Each argument may be set only once.',
                        attr.range,
                    ))
                    continue
                content.attributes[attr.name] = attr
            elif attr.name in block_types:
                diags.append(error(
                    "Unsupported argument",
                    f'An argument named "{attr.name}" is not expected here. '
                    f'Did you mean to define a block of type "{attr.name}"?',
                    attr.range,
                ))

        for block in self.blocks:
            header = body_schema.block_header(block.type)
            if header is None:
                if block.type in attr_names:
                    diags.append(error(
                        "Unsupported block type",
                        f'Blocks of type "{block.type}" are not expected here. '
                        f'Did you mean to define argument "{block.type}"? '
                        f'If so, use the equals sign to assign it a value.',
                        block.def_range,
                    ))
                continue
            label_diags = _label_count_diagnostics(block.type, block.labels, header, block.def_range)
            if label_diags:
                diags.extend(label_diags)
                continue
            content.blocks.append(block)

        return content, diags

    def just_attributes(self) -> Tuple[Dict[str, Attribute], Diagnostics]:
        diags = Diagnostics()
        attrs: Dict[str, Attribute] = {}
        for attr in self.attributes:
            if attr.name in attrs:
                diags.append(error(
                    "Duplicate argument",
                    f'The argument "{attr.name}" was already set. Each argument may be set only once.',
                    attr.range,
                ))
                continue
            attrs[attr.name] = attr
        for block in self.blocks:
            diags.append(error(
                "Unexpected block",
                f'Blocks are not allowed here; found a block of type "{block.type}".',
                block.def_range,
            ))
        return attrs, diags


# =============================================================================
# python-hcl2 adapter
# =============================================================================

META_KEYS = ("__start_line__", "__end_line__")

_INTERPOLATION_RE = re.compile(r"^\$\{(.*)\}$", re.DOTALL)

# "$${" and "%%{" are escapes for a literal "${" and "%{".
_TEMPLATE_SEQUENCE_RE = re.compile(r"\$\$\{|%%\{|\$\{|%\{")

_STRING_ESCAPE_RE = re.compile(
    r'\\(["\\nrt])|\\u([0-9A-Fa-f]{4})|\\U([0-9A-Fa-f]{8})|(\$\$\{|%%\{)'
)

_SIMPLE_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "r": "\r", "t": "\t"}


def _strip_meta(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in META_KEYS}


def _has_template_sequence(value: str) -> bool:
    return any(m.group(0) in ("${", "%{") for m in _TEMPLATE_SEQUENCE_RE.finditer(value))


def unescape_string(value: str) -> str:
    """
    Decode the escape sequences of a quoted HCL string.

    python-hcl2 strips the quotes but leaves escapes as written, so
    ``"a\\"b"`` arrives as ``a\\"b``. Unknown escapes are left untouched.
    """
    def _replace(match: "re.Match") -> str:
        simple, short, long, literal = match.groups()
        if simple:
            return _SIMPLE_ESCAPES[simple]
        if literal:
            return literal[1:]
        codepoint = int(short or long, 16)
        if codepoint > 0x10FFFF:
            return match.group(0)
        return chr(codepoint)

    return _STRING_ESCAPE_RE.sub(_replace, value)


def _is_static(value: Any) -> bool:
    if isinstance(value, str):
        return not _has_template_sequence(value)
    if isinstance(value, dict):
        return all(_is_static(v) for k, v in value.items() if k not in META_KEYS)
    if isinstance(value, list):
        return all(_is_static(v) for v in value)
    return True


def _unquote(label: str) -> str:
    if len(label) >= 2 and label[0] == label[-1] == "\"":
        return label[1:-1]
    return label


def _plain_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _plain_value(v) for k, v in value.items() if k not in META_KEYS}
    if isinstance(value, list):
        return [_plain_value(v) for v in value]
    if isinstance(value, str):
        return unescape_string(value)
    return value


def expression_from_hcl2(value: Any, range: Optional[Range] = None) -> Expression:
    """
    Convert one attribute value from ``hcl2.loads`` output into an expression.

    python-hcl2 renders every non-literal expression as a ``"${...}"`` string.
    A string that is exactly one interpolation of a static reference becomes
    a ``TraversalExpr``; any other string holding an interpolation or
    directive becomes a ``TemplateExpr``. An object with a non-static member
    becomes an ``ObjectExpr`` of per-member expressions, and any other
    non-static collection a ``TemplateExpr``. Everything else is a literal,
    with string escapes decoded.
    """
    range = range or Range()

    if isinstance(value, str):
        match = _INTERPOLATION_RE.match(value)
        if match and "${" not in match.group(1):
            traversal, diags = parse_traversal_abs(match.group(1), range.filename)
            if not diags.has_errors():
                return TraversalExpr(traversal=traversal, range=range)
        if _has_template_sequence(value):
            return TemplateExpr(source=value, range=range)
        return LiteralExpr(value=unescape_string(value), range=range)

    if isinstance(value, dict) and not _is_static(value):
        return ObjectExpr(
            items={k: expression_from_hcl2(v, range) for k, v in _strip_meta(value).items()},
            range=range,
        )

    if not _is_static(value):
        return TemplateExpr(source=repr(_plain_value(value)), range=range)

    return LiteralExpr(value=_plain_value(value), range=range)


def _range_from_meta(data: Any, filename: str) -> Range:
    if not isinstance(data, dict) or "__start_line__" not in data:
        return Range(filename=filename)
    start = Pos(line=data["__start_line__"])
    end = Pos(line=data.get("__end_line__", data["__start_line__"]))
    return Range(filename=filename, start=start, end=end)


class Hcl2Body(Body):
    """A body backed by a dictionary produced by ``hcl2.loads``."""

    def __init__(self, data: Dict[str, Any], filename: str = "", range: Optional[Range] = None):
        self.data = data
        self.filename = filename
        self.range = range or _range_from_meta(data, filename)

    def _attribute(self, name: str, value: Any) -> Attribute:
        return Attribute(
            name=name,
            expr=expression_from_hcl2(value, self.range),
            range=self.range,
        )

    def _unwrap_labels(self, block_type: str, item: Any, depth: int,
                       labels: List[str]) -> Iterator[Tuple[List[str], Any]]:
        """Yield ``(labels, body_data)`` pairs, descending ``depth`` label levels."""
        if depth == 0 or not isinstance(item, dict):
            yield labels, item
            return

        entries = _strip_meta(item)
        # A level whose values are not all dicts is already the block body.
        if not entries or not all(isinstance(v, dict) for v in entries.values()):
            yield labels, item
            return

        for label, nested in entries.items():
            yield from self._unwrap_labels(block_type, nested, depth - 1, labels + [_unquote(label)])

    def _blocks(self, header: BlockHeaderSchema, value: Any) -> Tuple[List[Block], Diagnostics]:
        diags = Diagnostics()
        blocks: List[Block] = []

        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            diags.append(error(
                "Unsupported argument",
                f'An argument named "{header.type}" is not expected here. '
                f'Did you mean to define a block of type "{header.type}"?',
                self.range,
            ))
            return blocks, diags

        for item in value:
            for labels, body_data in self._unwrap_labels(header.type, item, len(header.label_names), []):
                if not isinstance(body_data, dict):
                    body_data = {}
                def_range = _range_from_meta(body_data, self.filename)
                label_diags = _label_count_diagnostics(header.type, labels, header, def_range)
                if label_diags:
                    diags.extend(label_diags)
                    continue
                blocks.append(Block(
                    type=header.type,
                    labels=labels,
                    body=Hcl2Body(body_data, self.filename, def_range),
                    def_range=def_range,
                ))
        return blocks, diags

    def partial_content(self, body_schema: BodySchema) -> Tuple[BodyContent, Diagnostics]:
        diags = Diagnostics()
        content = BodyContent()
        entries = _strip_meta(self.data)

        for attr_schema in body_schema.attributes:
            if attr_schema.name in entries:
                content.attributes[attr_schema.name] = self._attribute(
                    attr_schema.name, entries[attr_schema.name],
                )

        # hcl2 groups blocks by type; start lines restore source order.
        for name, value in entries.items():
            header = body_schema.block_header(name)
            if header is None:
                continue
            blocks, block_diags = self._blocks(header, value)
            content.blocks.extend(blocks)
            diags.extend(block_diags)
        content.blocks.sort(key=lambda b: b.def_range.start.line)

        return content, diags

    def just_attributes(self) -> Tuple[Dict[str, Attribute], Diagnostics]:
        attrs = {
            name: self._attribute(name, value)
            for name, value in _strip_meta(self.data).items()
        }
        return attrs, Diagnostics()


Block.model_rebuild()
BodyContent.model_rebuild()
