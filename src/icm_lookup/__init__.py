"""
ICM Lookup

Exact and approximate lookup over ICD-9 and ICD-10 code sets:
- ICD-9 / ICD-10 diagnosis codes
- ICD-9 / ICD-10 procedure codes

The catalog is loaded once from bundled "code,description" files and then
answers exact lookups, edit-distance searches and random samples.
"""

from .catalog import Catalog, get_default_catalog
from .codes import CodeEntry, CodeType, normalize_code
from .distance import levenshtein_distance
from .exceptions import (
    CodeLookupError,
    MalformedSourceLineError,
    SampleCountError,
    SourceUnavailableError,
    UnknownSubsetError,
)
from .lookup import CodeLookup

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CodeEntry",
    "CodeLookup",
    "CodeLookupError",
    "CodeType",
    "MalformedSourceLineError",
    "SampleCountError",
    "SourceUnavailableError",
    "UnknownSubsetError",
    "get_default_catalog",
    "levenshtein_distance",
    "normalize_code",
]
