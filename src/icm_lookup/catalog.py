"""
The code catalog: all four code sets, built once and read-only afterwards.

A Catalog is normally built at application start and handed to CodeLookup.
get_default_catalog() offers a lazily built process-wide instance for callers
that do not manage their own.
"""

import threading
from collections import Counter
from itertools import chain
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union
import logging

from .codes import CodeEntry, CodeType
from .config import load_config
from .loader import load_subset_text, parse_code_lines

logger = logging.getLogger(__name__)

TextLoader = Callable[[CodeType], str]


class Catalog:
    """
    Immutable collection of the four code sets.

    Usage:
        # Build from the packaged data
        catalog = Catalog.load()

        # Or from in-memory text
        catalog = Catalog.from_texts({
            CodeType.ICD10_DIAGNOSIS: 'A000,"Cholera due to Vibrio cholerae 01, biovar cholerae"',
            CodeType.ICD9_DIAGNOSIS: "",
            CodeType.ICD9_PROCEDURE: "",
            CodeType.ICD10_PROCEDURE: "",
        })

        entries = catalog.subset(CodeType.ICD10_DIAGNOSIS)
    """

    def __init__(self, subsets: Mapping[Union[CodeType, str], Iterable[CodeEntry]]):
        """
        Initialize the catalog.

        Args:
            subsets: Entries for every code set, keyed by CodeType or alias

        Raises:
            ValueError: if any of the four code sets is missing
        """
        resolved: Dict[CodeType, Tuple[CodeEntry, ...]] = {}
        for key, entries in subsets.items():
            code_type = CodeType.parse(key)
            resolved[code_type] = tuple(dict.fromkeys(entries))

        missing = [code_type.value for code_type in CodeType if code_type not in resolved]
        if missing:
            raise ValueError(f"Catalog is missing code sets: {missing}")

        self._subsets = MappingProxyType(
            {code_type: resolved[code_type] for code_type in CodeType}
        )
        logger.info(f"Initialized {self!r}")

    @classmethod
    def load(
        cls,
        config: Optional[Dict] = None,
        text_loader: Optional[TextLoader] = None
    ) -> "Catalog":
        """
        Load and parse all four code sets.

        Any missing source or malformed line aborts the whole build.

        Args:
            config: Configuration dictionary (packaged defaults if None)
            text_loader: Callable returning raw text for a CodeType; overrides
                the file sources named in the config

        Returns:
            Catalog instance
        """
        if text_loader is None:
            config = config or load_config()
            sources = config.get("sources")

            def read_source(code_type: CodeType) -> str:
                return load_subset_text(
                    code_type,
                    data_dir=config.get("data_dir"),
                    sources=sources,
                    encoding=config.get("encoding", "utf-8")
                )

            text_loader = read_source

        return cls.from_texts({code_type: text_loader(code_type) for code_type in CodeType})

    @classmethod
    def from_texts(cls, texts: Mapping[Union[CodeType, str], str]) -> "Catalog":
        """Build a catalog from raw "code,description" text per code set."""
        subsets = {}
        for key, text in texts.items():
            code_type = CodeType.parse(key)
            subsets[code_type] = parse_code_lines(text, source=code_type.value)
        return cls(subsets)

    @property
    def subsets(self) -> Mapping[CodeType, Tuple[CodeEntry, ...]]:
        """Read-only view of all code sets."""
        return self._subsets

    def subset(self, code_type: Union[CodeType, str, int]) -> Tuple[CodeEntry, ...]:
        """
        Get the entries of one code set.

        Raises:
            UnknownSubsetError: if code_type does not name a code set
        """
        return self._subsets[CodeType.parse(code_type)]

    def entries(self) -> Iterator[CodeEntry]:
        """Iterate over all entries, code set by code set in canonical order."""
        return chain.from_iterable(self._subsets.values())

    def get_stats(self) -> Dict:
        """Get entry counts for every code set."""
        stats = {}
        for code_type, entries in self._subsets.items():
            normalized = Counter(entry.normalized_code for entry in entries)
            stats[code_type.value] = {
                "total_codes": len(entries),
                "unique_normalized_codes": len(normalized),
                "duplicate_normalized_codes": sum(
                    1 for count in normalized.values() if count > 1
                )
            }
        return stats

    def __contains__(self, entry: object) -> bool:
        return any(entry in entries for entries in self._subsets.values())

    def __iter__(self) -> Iterator[CodeEntry]:
        return self.entries()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._subsets.values())

    def __repr__(self) -> str:
        subset_info = ", ".join(
            f"{code_type.value}({len(entries)} codes)"
            for code_type, entries in self._subsets.items()
        )
        return f"Catalog({subset_info})"


# Process-wide catalog, built on first use
_default_catalog: Optional[Catalog] = None
_default_lock = threading.Lock()


def get_default_catalog() -> Catalog:
    """Get or build the process-wide catalog from the packaged data."""
    global _default_catalog
    if _default_catalog is None:
        with _default_lock:
            if _default_catalog is None:
                _default_catalog = Catalog.load()
    return _default_catalog


def reset_default_catalog():
    """Drop the process-wide catalog so the next call rebuilds it."""
    global _default_catalog
    with _default_lock:
        _default_catalog = None
