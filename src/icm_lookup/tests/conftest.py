"""
Shared fixtures for icm_lookup tests.

Run with: python -m pytest src/icm_lookup/tests
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from icm_lookup import Catalog, CodeLookup, CodeType


SAMPLE_TEXTS = {
    CodeType.ICD9_DIAGNOSIS: (
        "0010,Cholera due to vibrio cholerae\n"
        '0019,"Cholera, unspecified"\n'
        "4019,Unspecified essential hypertension\n"
    ),
    CodeType.ICD10_DIAGNOSIS: (
        'A000,"Cholera due to Vibrio cholerae 01, biovar cholerae"\n'
        'A001,"Cholera due to Vibrio cholerae 01, biovar eltor"\n'
        'A009,"Cholera, unspecified"\n'
        'A0100,"Typhoid fever, unspecified"\n'
        "I10,Essential (primary) hypertension\n"
    ),
    CodeType.ICD9_PROCEDURE: (
        "00.10,Implantation of chemotherapeutic agent\n"
        "45.23,Colonoscopy\n"
    ),
    CodeType.ICD10_PROCEDURE: (
        '0DTJ4ZZ,"Resection of Appendix, Percutaneous Endoscopic Approach"\n'
        '0FT44ZZ,"Resection of Gallbladder, Percutaneous Endoscopic Approach"\n'
    ),
}


@pytest.fixture
def sample_texts():
    """Raw source text for all four code sets"""
    return dict(SAMPLE_TEXTS)


@pytest.fixture
def sample_catalog(sample_texts):
    """Create a small catalog (12 entries)"""
    return Catalog.from_texts(sample_texts)


@pytest.fixture
def sample_lookup(sample_catalog):
    """Create a CodeLookup over the sample catalog with a seeded generator"""
    return CodeLookup(sample_catalog, rng=np.random.default_rng(42))


@pytest.fixture
def empty_catalog():
    """Catalog whose four code sets are all empty"""
    return Catalog({code_type: () for code_type in CodeType})


@pytest.fixture(scope="session")
def packaged_catalog():
    """Catalog built from the bundled data files"""
    return Catalog.load()
