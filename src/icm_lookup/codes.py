"""
Code entries and code set identifiers.

A CodeEntry is one line of a code file: the raw code, its description and the
normalized code used as the matching key. CodeType names the four code sets
(ICD-9/ICD-10 x diagnosis/procedure).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

from .exceptions import UnknownSubsetError


def normalize_code(code: str) -> str:
    """
    Keep ASCII letters and digits only and uppercase them.

    Examples:
        >>> normalize_code("a00.0")
        'A000'
        >>> normalize_code(" 0SR-D0J9 ")
        '0SRD0J9'
    """
    if code is None:
        return ""
    return "".join(ch for ch in str(code) if ch.isascii() and ch.isalnum()).upper()


@dataclass(frozen=True)
class CodeEntry:
    """
    One catalog entry.

    Equality and hashing use the raw code and description only, so two entries
    whose codes differ just in punctuation are distinct.
    """

    code: str
    description: str
    normalized_code: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "normalized_code", normalize_code(self.code))

    def to_dict(self) -> Dict[str, str]:
        return {
            "code": self.code,
            "description": self.description,
            "normalized_code": self.normalized_code,
        }

    def __str__(self) -> str:
        return f"{self.code}:{self.description}"


class CodeType(str, Enum):
    """The four code sets, in canonical order."""

    ICD9_DIAGNOSIS = "icd9_diagnosis"
    ICD10_DIAGNOSIS = "icd10_diagnosis"
    ICD9_PROCEDURE = "icd9_procedure"
    ICD10_PROCEDURE = "icd10_procedure"

    @property
    def axis(self) -> str:
        """'diagnosis' or 'procedure'."""
        return self.value.split("_", 1)[1]

    @property
    def revision(self) -> int:
        return int(self.value.split("_", 1)[0][len("icd"):])

    @property
    def label(self) -> str:
        return f"ICD-{self.revision} {self.axis}"

    @classmethod
    def from_parts(cls, axis: str, revision: Union[int, str]) -> "CodeType":
        return cls.parse(f"icd{revision}_{str(axis).lower()}")

    @classmethod
    def parse(cls, value: Union["CodeType", str, int]) -> "CodeType":
        """
        Resolve a code set identifier.

        Accepts a CodeType, its value or name, one of the historical aliases
        (e.g. "ICM10Diag", "ICD-10 procs", "diagnosis_9") or the menu index 0-3.

        Raises:
            UnknownSubsetError: if the identifier does not name a code set
        """
        if isinstance(value, cls):
            return value

        # bool is an int subclass; True/False are not menu indices
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise UnknownSubsetError(value)

        if isinstance(value, str):
            key = _alias_key(value)
            if key.isascii() and key.isdigit():
                return cls.parse(int(key))
            if key in _ALIASES:
                return cls(_ALIASES[key])

        raise UnknownSubsetError(value)

    def __str__(self) -> str:
        return self.value


def _alias_key(value: str) -> str:
    return "".join(ch for ch in value.strip().lower() if ch.isalnum())


def _build_aliases() -> Dict[str, str]:
    """Map identifier variations to canonical values, keyed by lowercase alphanumerics."""
    aliases = {}
    for member in CodeType:
        revision = member.revision
        axis = member.axis
        short = axis[:4]
        for alias in (
            member.value,
            member.name,
            f"icm{revision}{short}",
            f"icd{revision}{short}",
            f"icd{revision}{short}s",
            f"icm{revision}{axis}",
            f"icd{revision}{axis}",
            f"icm{revision}{axis}s",
            f"icd{revision}{axis}s",
            f"{axis}{revision}",
        ):
            aliases[_alias_key(alias)] = member.value
    return aliases


_ALIASES = _build_aliases()
