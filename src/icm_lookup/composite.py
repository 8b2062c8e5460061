"""
Routing of MEDS event codes to a code set.

MEDS event streams write ICD codes as DIAGNOSIS//ICD//10//A000 or
PROCEDURE//ICD//9//89.38; the prefix and the ICD version pick the CodeType.
"""

import re
from typing import Optional, Dict, Tuple

from .codes import CodeType

_COMPOSITE_RE = re.compile(
    r'^\s*(?P<prefix>DIAGNOSIS|PROCEDURE)\s*//\s*(?P<system>ICD)\s*//\s*(?P<version>9|10)\s*//\s*(?P<code>.+?)\s*$',
    flags=re.IGNORECASE
)


def parse_composite_code(code_string: str) -> Optional[Dict[str, str]]:
    """
    Split a MEDS event code into prefix, system, version and code.

    Examples:
        >>> parse_composite_code("diagnosis//icd//10//A00.0")
        {'prefix': 'DIAGNOSIS', 'system': 'ICD', 'version': '10', 'code': 'A00.0'}

    Returns:
        The parts, or None for anything that is not a diagnosis/procedure ICD-9/10 event code
    """
    if not isinstance(code_string, str):
        return None

    match = _COMPOSITE_RE.match(code_string)
    if not match:
        return None

    return {
        "prefix": match.group('prefix').upper(),
        "system": match.group('system').upper(),
        "version": match.group('version'),
        "code": match.group('code').strip()
    }


def extract_plain_code(code_string: str) -> str:
    """Return the code part of an event code, or the input itself for a plain code."""
    parsed = parse_composite_code(code_string)
    if parsed:
        return parsed['code']
    return "" if code_string is None else str(code_string)


def route_composite_code(code_string: str) -> Tuple[str, Optional[CodeType]]:
    """
    Split a query into its plain code and the code set it is routed to.

    Plain codes come back unchanged with no code set.

    Examples:
        >>> route_composite_code("DIAGNOSIS//ICD//9//5723")
        ('5723', <CodeType.ICD9_DIAGNOSIS: 'icd9_diagnosis'>)
    """
    parsed = parse_composite_code(code_string)
    if not parsed:
        return extract_plain_code(code_string), None
    return parsed['code'], CodeType.from_parts(parsed['prefix'], parsed['version'])
