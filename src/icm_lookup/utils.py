"""
Utility functions for working with code entries in pandas.
"""

import pandas as pd
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union
import logging

from .codes import CodeEntry, CodeType
from .exceptions import MalformedSourceLineError
from .loader import parse_code_line, split_source_lines

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = ["code", "description", "normalized_code"]


def entries_to_dataframe(
    entries: Sequence[CodeEntry],
    distances: Optional[Sequence[int]] = None
) -> pd.DataFrame:
    """
    Convert code entries to a DataFrame.

    Args:
        entries: CodeEntry objects
        distances: Optional edit distance per entry, added as a 'distance' column

    Returns:
        DataFrame with code, description and normalized_code columns
    """
    df = pd.DataFrame([entry.to_dict() for entry in entries], columns=ENTRY_COLUMNS)

    if distances is not None:
        if len(distances) != len(entries):
            raise ValueError(
                f"Got {len(distances)} distances for {len(entries)} entries"
            )
        df["distance"] = list(distances)

    return df


def search_dataframe(lookup, query: str, max_results: Optional[int] = None) -> pd.DataFrame:
    """
    Run a nearest-code search and return the ranked results as a DataFrame.

    Args:
        lookup: CodeLookup instance
        query: Query code
        max_results: Number of results

    Returns:
        DataFrame with entry columns plus 'distance', nearest first
    """
    ranked = lookup.rank(query, max_results=max_results)
    return entries_to_dataframe(
        [entry for entry, _ in ranked],
        distances=[distance for _, distance in ranked]
    )


def enrich_dataframe(
    df: pd.DataFrame,
    code_column: str,
    lookup,
    description_column: str = "description",
    code_type: Optional[Union[CodeType, str]] = None,
    default: str = "Unknown",
    inplace: bool = False
) -> pd.DataFrame:
    """
    Add description column to DataFrame based on code column.

    Args:
        df: DataFrame with code column
        code_column: Name of column containing codes
        lookup: CodeLookup instance
        description_column: Name for new description column
        code_type: Code set to search, or None to search all four
        default: Description used for codes not found
        inplace: Modify DataFrame inplace

    Returns:
        DataFrame with added description column
    """
    if code_column not in df.columns:
        raise ValueError(f"Column '{code_column}' not found in DataFrame")

    if not inplace:
        df = df.copy()

    df[description_column] = df[code_column].apply(
        lambda code: default if pd.isna(code) else lookup.get_description(
            str(code), default=default, code_type=code_type
        )
    )

    logger.info(f"Added '{description_column}' column to DataFrame")

    return df


def find_missing_codes(
    df: pd.DataFrame,
    code_column: str,
    lookup,
    code_type: Optional[Union[CodeType, str]] = None,
    return_dataframe: bool = True
) -> Union[pd.DataFrame, List[str]]:
    """
    Find codes in a DataFrame that are missing from the catalog.

    Args:
        df: DataFrame containing codes
        code_column: Name of column with codes
        lookup: CodeLookup instance
        code_type: Code set to check, or None to check all four
        return_dataframe: If True, return DataFrame of missing codes

    Returns:
        DataFrame with a 'missing_code' column, or a list of codes
    """
    if code_column not in df.columns:
        raise ValueError(f"Column '{code_column}' not found in DataFrame")

    codes = df[code_column].dropna().astype(str).unique()
    missing = [code for code in codes if not lookup.code_exists(code, code_type)]

    if len(codes):
        logger.info(
            f"Found {len(missing)} missing codes out of "
            f"{len(codes)} unique codes ({len(missing)/len(codes)*100:.1f}%)"
        )

    if return_dataframe:
        return pd.DataFrame({"missing_code": missing})

    return missing


def validate_source_text(text: str, sample_size: int = 5) -> Dict:
    """
    Check raw "code,description" text and return statistics.

    Unlike catalog loading, this reports malformed lines instead of raising.

    Args:
        text: Raw file contents
        sample_size: Number of sample entries to return

    Returns:
        Dictionary with validation results and statistics
    """
    entries = []
    malformed_lines = []
    total_lines = 0

    for line_number, line in enumerate(split_source_lines(text), start=1):
        if not line.strip():
            continue
        total_lines += 1
        try:
            entries.append(parse_code_line(line, line_number))
        except MalformedSourceLineError as e:
            malformed_lines.append(e.line_number)

    unique_entries = list(dict.fromkeys(entries))
    normalized = Counter(entry.normalized_code for entry in unique_entries)

    return {
        "valid": not malformed_lines,
        "total_lines": total_lines,
        "total_entries": len(unique_entries),
        "duplicate_lines": len(entries) - len(unique_entries),
        "malformed_lines": malformed_lines,
        "unique_normalized_codes": len(normalized),
        "duplicate_normalized_codes": sorted(
            code for code, count in normalized.items() if count > 1
        ),
        "sample": [entry.to_dict() for entry in unique_entries[:sample_size]]
    }


def export_subset_to_csv(
    catalog,
    code_type: Union[CodeType, str],
    output_path: Union[str, Path],
    encoding: str = "utf-8"
):
    """
    Export one code set as "code,description" lines.

    Descriptions are always quoted, so the file loads back unchanged.

    Args:
        catalog: Catalog instance
        code_type: Code set to export
        output_path: Path for output CSV file
        encoding: File encoding
    """
    code_type = CodeType.parse(code_type)
    entries = catalog.subset(code_type)
    lines = [f'{entry.code},"{entry.description}"' for entry in entries]

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding=encoding)

    logger.info(f"Exported {len(entries)} {code_type.value} codes to {output_path}")
