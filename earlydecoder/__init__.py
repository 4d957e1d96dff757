"""
earlydecoder - Early, partial decoding of infrastructure configuration modules.

Scans parsed HCL files and extracts a cheap semantic summary of a module:
required core versions, provider requirements and configurations, resources
and data sources with their providers, and module calls. Problems are
reported as diagnostics and never stop decoding, so editor tooling can use
the result before (or instead of) a full, strict decode.
"""

from .decoder import load_module, load_module_from_file
from .diagnostics import Diagnostic, Diagnostics, Pos, Range, Severity
from .loader import load_module_from_dir
from .models import (
    DataSource, DecodedModule, ModuleCall, ProviderConfig, ProviderRef,
    ProviderRequirement, Resource,
)
from .settings import EarlyDecoderSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "load_module",
    "load_module_from_file",
    "load_module_from_dir",
    "Diagnostic",
    "Diagnostics",
    "Pos",
    "Range",
    "Severity",
    "DataSource",
    "DecodedModule",
    "ModuleCall",
    "ProviderConfig",
    "ProviderRef",
    "ProviderRequirement",
    "Resource",
    "EarlyDecoderSettings",
    "get_settings",
    "reload_settings",
]
