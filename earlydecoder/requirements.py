"""
Decoding and merging of ``required_providers`` declarations.

A module may declare ``required_providers`` in several ``terraform`` blocks
across several files. Declarations for the same local name are combined:
version constraints accumulate, and the source address must agree wherever
it is given.
"""

import logging
import re
from typing import Dict, Mapping, Optional, Tuple

from .diagnostics import Diagnostics, Range, error
from .hcl import Attribute, Block, Expression, LiteralExpr, ObjectExpr, decode_string
from .models import ProviderRequirement

logger = logging.getLogger(__name__)

_PROVIDER_NAME_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def check_provider_name_normalized(name: str, subject: Optional[Range] = None) -> Diagnostics:
    """Check that a provider local name is in its normalized, lower-case form."""
    normalized = name.lower()
    if not _PROVIDER_NAME_RE.match(normalized):
        return Diagnostics([error(
            "Invalid provider local name",
            f"{name!r} is an invalid provider local name: may contain only "
            f"lowercase letters, digits and dashes, and may not start or end with a dash.",
            subject,
        )])
    if normalized != name:
        return Diagnostics([error(
            "Invalid provider local name",
            f"Provider names must be normalized. Replace {name!r} with {normalized!r} to fix this error.",
            subject,
        )])
    return Diagnostics()


def _invalid_object(name: str, attr: Attribute, reason: str) -> Diagnostics:
    return Diagnostics([error(
        "Invalid required_providers object",
        f"required_providers entry {name!r} {reason}. It must be a version constraint "
        f'string or an object with "source" and "version" strings.',
        attr.expr.range,
    )])


def _object_members(expr: Expression) -> Optional[Dict[str, Expression]]:
    if isinstance(expr, ObjectExpr):
        return dict(expr.items)
    if isinstance(expr, LiteralExpr) and isinstance(expr.value, dict):
        return {k: LiteralExpr(value=v, range=expr.range) for k, v in expr.value.items()}
    return None


def _decode_requirement(name: str, attr: Attribute) -> Tuple[ProviderRequirement, Diagnostics]:
    req = ProviderRequirement()
    expr = attr.expr

    members = _object_members(expr)
    if members is not None:
        diags = Diagnostics()
        for key in ("source", "version"):
            if key not in members:
                continue
            member = members[key]
            if isinstance(member, LiteralExpr) and not isinstance(member.value, str):
                diags.extend(_invalid_object(name, attr, f'has a non-string "{key}"'))
                continue
            value, member_diags = decode_string(member)
            if member_diags.has_errors():
                diags.extend(member_diags)
                continue
            if key == "source":
                req.source = value
            else:
                req.version_constraints.append(value)
        return req, diags

    if isinstance(expr, LiteralExpr) and isinstance(expr.value, (list, type(None))):
        return req, _invalid_object(name, attr, "is not a string or object")

    # Legacy form: a bare version constraint string
    version, diags = decode_string(expr)
    if diags.has_errors():
        return req, diags
    req.version_constraints.append(version)
    return req, diags


def decode_required_providers_block(block: Block) -> Tuple[Dict[str, ProviderRequirement], Diagnostics]:
    """
    Decode a ``required_providers`` block into requirements keyed by local name.

    Args:
        block: The ``required_providers`` block

    Returns:
        Requirements in declaration order and any diagnostics
    """
    attrs, diags = block.body.just_attributes()
    reqs: Dict[str, ProviderRequirement] = {}

    for name, attr in attrs.items():
        diags.extend(check_provider_name_normalized(name, attr.range))
        req, req_diags = _decode_requirement(name, attr)
        diags.extend(req_diags)
        reqs[name] = req

    return reqs, diags


def merge_requirements(existing: Dict[str, ProviderRequirement],
                       fragments: Mapping[str, ProviderRequirement],
                       subject: Optional[Range] = None) -> Diagnostics:
    """
    Merge newly decoded requirements into ``existing`` in place.

    A new name is inserted as is. For a known name, a non-empty source is
    adopted unless a different non-empty source is already recorded, which
    is an error and leaves the recorded source alone. Version constraints
    are always appended in encounter order.

    Args:
        existing: Requirements accumulated so far, keyed by local name
        fragments: Requirements from one ``required_providers`` block
        subject: Range to anchor conflict diagnostics at

    Returns:
        Diagnostics, one per conflicting source
    """
    diags = Diagnostics()

    for name, req in fragments.items():
        if name not in existing:
            existing[name] = req
            continue

        current = existing[name]
        if req.source:
            if current.source and current.source != req.source:
                logger.debug(f"Conflicting sources for provider {name}: {current.source!r}, {req.source!r}")
                diags.append(error(
                    "Multiple provider source attributes",
                    f'Found multiple source attributes for provider {name}: "{current.source}", "{req.source}"',
                    subject,
                ))
            else:
                current.source = req.source

        current.version_constraints.extend(req.version_constraints)

    return diags
