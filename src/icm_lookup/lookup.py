"""
Core CodeLookup class: exact lookup, edit-distance search and random sampling
over a Catalog.

Supports:
- Exact lookup by normalized code, in one code set or across all four
- Nearest-code search ranked by Levenshtein distance
- Random samples drawn without replacement from one code set
- Composite code format (e.g., DIAGNOSIS//ICD//10//A000)
"""

import numpy as np
from typing import Iterable, List, Optional, Tuple, Union
import logging

from .catalog import Catalog, get_default_catalog
from .codes import CodeEntry, CodeType, normalize_code
from .composite import route_composite_code
from .distance import levenshtein_distance
from .exceptions import SampleCountError

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10

SubsetLike = Union[CodeType, str, int]


class CodeLookup:
    """
    Read-only query interface over a Catalog.

    All queries leave the catalog untouched, so one instance can serve many
    threads once the catalog is built.

    Usage:
        lookup = CodeLookup(Catalog.load())

        # Exact lookup, case and punctuation insensitive
        entry = lookup.find("a00.0", CodeType.ICD10_DIAGNOSIS)

        # Ten nearest codes across all code sets
        entries = lookup.search("A00")

        # Five random ICD-10 diagnosis codes
        samples = lookup.get_samples(CodeType.ICD10_DIAGNOSIS, 5)
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        rng: Optional[np.random.Generator] = None,
        max_results: int = DEFAULT_MAX_RESULTS
    ):
        """
        Initialize CodeLookup.

        Args:
            catalog: Catalog to query (process-wide default catalog if None)
            rng: Random generator for get_samples (unseeded if None)
            max_results: Default number of search results
        """
        self.catalog = catalog if catalog is not None else get_default_catalog()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_results = max_results
        logger.info(f"Initialized CodeLookup over {len(self.catalog)} codes")

    def _candidates(self, code_type: Optional[SubsetLike]) -> Iterable[CodeEntry]:
        if code_type is None:
            return self.catalog.entries()
        return self.catalog.subset(code_type)

    def find(
        self,
        code: str,
        code_type: Optional[SubsetLike] = None
    ) -> Optional[CodeEntry]:
        """
        Find the entry whose normalized code equals the normalized query.

        Composite codes ("DIAGNOSIS//ICD//10//A000") are looked up in the code set
        they name unless code_type is given.

        Args:
            code: Code to look up (plain or composite format)
            code_type: Code set to search, or None to search all four

        Returns:
            The first matching CodeEntry, or None if not found. An empty
            normalized query never matches.

        Raises:
            UnknownSubsetError: if code_type does not name a code set
        """
        if code_type is not None:
            code_type = CodeType.parse(code_type)

        plain_code, routed_type = route_composite_code(code)
        if routed_type is not None:
            if code_type is None:
                logger.debug(f"Routing composite code {code!r} to {routed_type.value}")
                code_type = routed_type
            elif code_type is not routed_type:
                logger.warning(
                    f"Composite code {code!r} names {routed_type.value}, "
                    f"searching requested code set {code_type.value}"
                )

        normalized = normalize_code(plain_code)
        for entry in self._candidates(code_type):
            if entry.normalized_code == normalized:
                return entry

        logger.debug(f"Code not found: {code!r}")
        return None

    def rank(
        self,
        code: str,
        max_results: Optional[int] = None
    ) -> List[Tuple[CodeEntry, int]]:
        """
        Rank all entries by edit distance to the query.

        Ties keep catalog order (code set order, then file order).

        Args:
            code: Query code (plain or composite format)
            max_results: Number of results (defaults to self.max_results)

        Returns:
            List of (CodeEntry, distance) pairs, nearest first
        """
        limit = self.max_results if max_results is None else max_results
        if limit < 0:
            raise ValueError(f"max_results must not be negative, got {limit}")

        plain_code, _ = route_composite_code(code)
        normalized = normalize_code(plain_code)

        scored = [
            (entry, levenshtein_distance(entry.normalized_code, normalized))
            for entry in self.catalog.entries()
        ]
        scored.sort(key=lambda pair: pair[1])
        return scored[:limit]

    def search(self, code: str, max_results: Optional[int] = None) -> List[CodeEntry]:
        """
        Find the entries closest to the query by Levenshtein distance.

        Args:
            code: Query code (plain or composite format)
            max_results: Number of results (defaults to self.max_results)

        Returns:
            Up to max_results CodeEntry objects, nearest first. Empty only when
            the catalog is empty.
        """
        return [entry for entry, _ in self.rank(code, max_results=max_results)]

    def get_samples(self, code_type: SubsetLike, count: int) -> List[CodeEntry]:
        """
        Return random entries from one code set.

        Entries are drawn without replacement, in random order.

        Args:
            code_type: Code set to sample from
            count: Number of entries to return

        Returns:
            List of count distinct CodeEntry objects

        Raises:
            UnknownSubsetError: if code_type does not name a code set
            SampleCountError: if count is negative or larger than the code set
        """
        entries = self.catalog.subset(code_type)

        if count < 0 or count > len(entries):
            raise SampleCountError(count, len(entries))

        order = self.rng.permutation(len(entries))[:count]
        return [entries[i] for i in order]

    def code_exists(self, code: str, code_type: Optional[SubsetLike] = None) -> bool:
        """Check if a code exists in the catalog."""
        return self.find(code, code_type) is not None

    def get_description(
        self,
        code: str,
        default: str = "Unknown",
        code_type: Optional[SubsetLike] = None
    ) -> str:
        """
        Get description for a single code.

        Args:
            code: Medical code to lookup (plain or composite format)
            default: Default value if code not found
            code_type: Code set to search, or None to search all four

        Returns:
            Description string
        """
        entry = self.find(code, code_type)
        return entry.description if entry is not None else default

    def __len__(self) -> int:
        return len(self.catalog)

    def __repr__(self) -> str:
        return f"CodeLookup(total_codes={len(self.catalog)}, max_results={self.max_results})"

    def __getitem__(self, code: str) -> CodeEntry:
        """Allow dict-like access: lookup[code]"""
        entry = self.find(code)
        if entry is None:
            raise KeyError(code)
        return entry
