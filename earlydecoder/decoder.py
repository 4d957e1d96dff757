"""
Early decoding of module configuration.

``load_module_from_file`` walks the top-level blocks of one parsed file and
records what it finds in a shared ``DecodedModule``. Call it once per file of
a module with the same accumulator; diagnostics are returned, never raised,
and every block is visited regardless of earlier problems.
"""

import logging
from typing import Dict, Mapping, Tuple

from .diagnostics import Diagnostics
from .hcl import Block, Body, decode_string
from .models import (
    DataSource, DecodedModule, ModuleCall, ProviderConfig, ProviderRef,
    ProviderRequirement, Resource,
)
from .references import decode_provider_attribute, infer_provider_name_from_type
from .requirements import decode_required_providers_block, merge_requirements
from .schema import (
    module_schema, provider_config_schema, resource_schema, root_schema,
    terraform_block_schema,
)

logger = logging.getLogger(__name__)


def _decode_terraform_block(block: Block, mod: DecodedModule) -> Diagnostics:
    content, diags = block.body.partial_content(terraform_block_schema)

    attr = content.attributes.get("required_version")
    if attr is not None:
        version, val_diags = decode_string(attr.expr)
        diags.extend(val_diags)
        if not val_diags.has_errors():
            mod.required_core.append(version)

    for inner in content.blocks:
        if inner.type != "required_providers":
            continue
        reqs, reqs_diags = decode_required_providers_block(inner)
        diags.extend(reqs_diags)
        diags.extend(merge_requirements(mod.provider_requirements, reqs, inner.def_range))

    return diags


def _decode_provider_block(block: Block, mod: DecodedModule) -> Diagnostics:
    content, diags = block.body.partial_content(provider_config_schema)

    name = block.labels[0]
    # An entry signals the dependency even when no version is given.
    if name not in mod.provider_requirements:
        mod.provider_requirements[name] = ProviderRequirement()

    attr = content.attributes.get("version")
    if attr is not None:
        version, val_diags = decode_string(attr.expr)
        diags.extend(val_diags)
        if not val_diags.has_errors():
            mod.provider_requirements[name].version_constraints.append(version)

    alias = ""
    attr = content.attributes.get("alias")
    if attr is not None:
        value, val_diags = decode_string(attr.expr)
        diags.extend(val_diags)
        if not val_diags.has_errors():
            alias = value

    config = ProviderConfig(name=name, alias=alias)
    mod.provider_configs[config.map_key()] = config
    return diags


def _decode_provider_binding(block: Block) -> Tuple[ProviderRef, Diagnostics]:
    content, diags = block.body.partial_content(resource_schema)

    attr = content.attributes.get("provider")
    if attr is not None:
        ref, ref_diags = decode_provider_attribute(attr)
        diags.extend(ref_diags)
        return ref, diags

    return ProviderRef(local_name=infer_provider_name_from_type(block.labels[0])), diags


def _decode_data_block(block: Block, mod: DecodedModule) -> Diagnostics:
    ds = DataSource(type=block.labels[0], name=block.labels[1])
    mod.data_sources[ds.map_key()] = ds
    ds.provider, diags = _decode_provider_binding(block)
    return diags


def _decode_resource_block(block: Block, mod: DecodedModule) -> Diagnostics:
    r = Resource(type=block.labels[0], name=block.labels[1])
    mod.resources[r.map_key()] = r
    r.provider, diags = _decode_provider_binding(block)
    return diags


def _decode_module_block(block: Block, mod: DecodedModule) -> Diagnostics:
    content, diags = block.body.partial_content(module_schema)

    call = ModuleCall(name=block.labels[0])
    mod.module_calls[call.map_key()] = call

    attr = content.attributes.get("source")
    if attr is not None:
        source, val_diags = decode_string(attr.expr)
        diags.extend(val_diags)
        if not val_diags.has_errors():
            call.source = source

    return diags


BLOCK_DECODERS = {
    "terraform": _decode_terraform_block,
    "provider": _decode_provider_block,
    "data": _decode_data_block,
    "resource": _decode_resource_block,
    "module": _decode_module_block,
}


def load_module_from_file(body: Body, mod: DecodedModule) -> Diagnostics:
    """
    Decode one parsed file into ``mod``.

    Args:
        body: Root body of the parsed file
        mod: Accumulator shared by all files of the module; mutated in place

    Returns:
        Every diagnostic produced while decoding the file
    """
    content, diags = body.partial_content(root_schema)

    for block in content.blocks:
        decoder = BLOCK_DECODERS.get(block.type)
        if decoder is None:
            continue
        logger.debug(f"Decoding {block.type} block {' '.join(block.labels)} at {block.def_range}")
        diags.extend(decoder(block, mod))

    return diags


def load_module(files: Mapping[str, Body]) -> Tuple[DecodedModule, Dict[str, Diagnostics]]:
    """
    Decode every file of one module into a fresh accumulator.

    Files are decoded in filename order so that "last declaration wins"
    is deterministic.

    Args:
        files: Parsed root bodies keyed by filename

    Returns:
        The decoded module and the diagnostics of each file
    """
    mod = DecodedModule()
    diags_by_file: Dict[str, Diagnostics] = {}

    for filename in sorted(files):
        diags_by_file[filename] = load_module_from_file(files[filename], mod)

    logger.info(
        f"Decoded {len(files)} file(s): {len(mod.resources)} resources, "
        f"{len(mod.data_sources)} data sources, {len(mod.module_calls)} module calls"
    )
    return mod, diags_by_file
