"""
Loading a module directory from disk.

Discovers the configuration files of one module, parses each with the HCL
front end and decodes them into a single ``DecodedModule``. Files that fail to
parse contribute diagnostics instead of facts.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .decoder import load_module
from .diagnostics import Diagnostics
from .errors import ModuleLoadError
from .hcl import Body, parse_file
from .models import DecodedModule
from .settings import EarlyDecoderSettings, get_settings

logger = logging.getLogger(__name__)


def find_module_files(directory_path: Union[str, Path],
                      settings: Optional[EarlyDecoderSettings] = None) -> List[Path]:
    """
    Find the configuration files of a module directory.

    Args:
        directory_path: Directory holding the module
        settings: Settings providing the file suffixes; global settings if omitted

    Returns:
        Matching files sorted by name

    Raises:
        ModuleLoadError: If the path is not a readable directory
    """
    settings = settings or get_settings()
    directory_path = Path(directory_path)

    if not directory_path.is_dir():
        raise ModuleLoadError(f"Path is not a directory: {directory_path}")

    try:
        entries = list(directory_path.iterdir())
    except OSError as e:
        raise ModuleLoadError(f"Cannot read module directory {directory_path}: {e}") from e

    return sorted(
        p for p in entries
        if p.is_file() and p.suffix in settings.file_suffixes
    )


def load_module_from_dir(directory_path: Union[str, Path],
                         settings: Optional[EarlyDecoderSettings] = None
                         ) -> Tuple[DecodedModule, Dict[str, Diagnostics]]:
    """
    Parse and decode every configuration file of a module directory.

    Args:
        directory_path: Directory holding the module
        settings: Optional settings override

    Returns:
        The decoded module and the diagnostics of each file

    Raises:
        ModuleLoadError: If the path is not a readable directory
    """
    files = find_module_files(directory_path, settings)
    logger.info(f"Loading {len(files)} file(s) from {directory_path}")

    bodies: Dict[str, Body] = {}
    parse_diags: Dict[str, Diagnostics] = {}
    for file_path in files:
        body, diags = parse_file(file_path)
        parse_diags[str(file_path)] = diags
        if body is not None:
            bodies[str(file_path)] = body

    mod, decode_diags = load_module(bodies)

    diags_by_file: Dict[str, Diagnostics] = {}
    for filename in sorted(parse_diags):
        diags_by_file[filename] = Diagnostics(parse_diags[filename] + decode_diags.get(filename, []))
    return mod, diags_by_file
