"""
Parse front end for HCL configuration files.

Text is handed to python-hcl2 and the result wrapped in an ``Hcl2Body``.
Syntax and read failures are reported as diagnostics so a broken file never
stops the rest of a module from loading.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import hcl2

from ..diagnostics import Diagnostics, Pos, Range, error
from .body import Hcl2Body

logger = logging.getLogger(__name__)


def _syntax_range(exc: Exception, filename: str) -> Range:
    line = getattr(exc, "line", None)
    column = getattr(exc, "column", None)
    if isinstance(line, int) and line > 0:
        pos = Pos(line=line, column=column if isinstance(column, int) and column > 0 else 1)
        return Range(filename=filename, start=pos, end=pos)
    return Range(filename=filename)


def parse_string(hcl_content: str, filename: str = "") -> Tuple[Optional[Hcl2Body], Diagnostics]:
    """
    Parse HCL content from a string.

    Args:
        hcl_content: HCL content as a string
        filename: Name recorded in source ranges

    Returns:
        The parsed body (None on failure) and any diagnostics
    """
    try:
        data = hcl2.loads(hcl_content, with_meta=True)
    except Exception as e:
        # lark raises UnexpectedToken / UnexpectedCharacters with line info
        if hasattr(e, "token") or "Unexpected" in type(e).__name__:
            summary = "Invalid HCL syntax"
        else:
            summary = "Failed to parse HCL content"
        logger.debug(f"Parsing {filename or '<string>'} failed: {e}")
        return None, Diagnostics([error(summary, str(e).strip(), _syntax_range(e, filename))])

    return Hcl2Body(data, filename), Diagnostics()


def parse_file(file_path: Union[str, Path]) -> Tuple[Optional[Hcl2Body], Diagnostics]:
    """
    Read and parse a single configuration file.

    Args:
        file_path: Path to the file to parse

    Returns:
        The parsed body (None on failure) and any diagnostics
    """
    file_path = Path(file_path)
    filename = str(file_path)

    try:
        content = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return None, Diagnostics([error(
            "File encoding error", f"{filename} is not valid UTF-8: {e}", Range(filename=filename),
        )])
    except OSError as e:
        return None, Diagnostics([error(
            "Failed to read file", f"{filename}: {e.strerror or e}", Range(filename=filename),
        )])

    return parse_string(content, filename)
