"""
Loading code sets from "code,description" text.

Each non-empty line is split at its first comma. The code part is trimmed of
whitespace; the description part is trimmed of whitespace and double quotes, and
may itself contain commas.
"""

import string
from importlib.resources import files
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import logging

from .codes import CodeEntry, CodeType
from .exceptions import MalformedSourceLineError, SourceUnavailableError

logger = logging.getLogger(__name__)

DATA_PACKAGE = "icm_lookup.data"

DEFAULT_SOURCES: Dict[str, str] = {
    CodeType.ICD9_DIAGNOSIS.value: "icd9_diagnosis.csv",
    CodeType.ICD10_DIAGNOSIS.value: "icd10_diagnosis.csv",
    CodeType.ICD9_PROCEDURE.value: "icd9_procedure.csv",
    CodeType.ICD10_PROCEDURE.value: "icd10_procedure.csv",
}

# Leading/trailing characters removed from descriptions, in any order
_DESCRIPTION_TRIM = string.whitespace + '"'


def split_source_lines(text: str) -> List[str]:
    """Split on \\n, \\r\\n and \\r only; other separators stay inside the line."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def parse_code_line(line: str, line_number: int = 1, source: Optional[str] = None) -> CodeEntry:
    """
    Parse a single "code,description" line.

    Raises:
        MalformedSourceLineError: if the line has no comma
    """
    index = line.find(",")
    if index < 0:
        raise MalformedSourceLineError(line_number, line, source=source)

    code = line[:index].strip()
    description = line[index + 1:].strip(_DESCRIPTION_TRIM)
    return CodeEntry(code, description)


def parse_code_lines(text: str, source: Optional[str] = None) -> Tuple[CodeEntry, ...]:
    """
    Parse raw source text into code entries.

    Blank lines are skipped. Identical (code, description) pairs are kept once,
    in the order first seen.

    Args:
        text: Raw file contents
        source: Name used in error messages

    Returns:
        Tuple of CodeEntry objects
    """
    entries: Dict[CodeEntry, None] = {}

    for line_number, line in enumerate(split_source_lines(text), start=1):
        if not line.strip():
            continue
        entries.setdefault(parse_code_line(line, line_number, source), None)

    logger.debug(f"Parsed {len(entries)} entries from {source or 'text'}")
    return tuple(entries)


def load_subset_text(
    code_type: Union[CodeType, str],
    data_dir: Optional[Union[str, Path]] = None,
    sources: Optional[Dict[str, str]] = None,
    encoding: str = "utf-8"
) -> str:
    """
    Read the raw text for one code set.

    Args:
        code_type: Code set to read
        data_dir: Directory holding the source files (packaged data if None)
        sources: Mapping of code set value to file name
        encoding: File encoding

    Returns:
        File contents

    Raises:
        SourceUnavailableError: if the file does not exist or cannot be read
    """
    code_type = CodeType.parse(code_type)
    file_name = (sources or DEFAULT_SOURCES).get(code_type.value)
    if not file_name:
        raise SourceUnavailableError(code_type.value, "No source file configured.")

    if data_dir is None:
        resource = files(DATA_PACKAGE) / file_name
    else:
        resource = Path(data_dir) / file_name

    if not resource.is_file():
        raise SourceUnavailableError(file_name)

    try:
        text = resource.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(file_name, str(e)) from e

    logger.info(f"Loaded {code_type.label} source {file_name}")
    return text
