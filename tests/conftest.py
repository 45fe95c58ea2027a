import os

import pandas as pd
import pytest


@pytest.fixture(scope="session")
def fpath_test_dir() -> str:
    """
    Path to `tests/data/` folder.
    """
    return os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture(scope="session")
def fpath_srp009615(fpath_test_dir: str) -> str:
    return os.path.join(fpath_test_dir, "SRP009615_metadata.tsv")


@pytest.fixture
def geo_metadata() -> pd.DataFrame:
    """
    Two GEO samples from SRP009615 with characteristics already split into lists,
    the way they come back from a GEO lookup.
    """
    return pd.DataFrame(
        {
            "run": ["SRR387777", "SRR387778"],
            "geo_accession": ["GSM836270", "GSM836271"],
            "characteristics": [
                ["cells: K562", "shRNA expression: no", "treatment: Puromycin"],
                ["cells: K562", "shRNA expression: yes, targeting SRF", "treatment: Puromycin, doxycycline"],
            ],
        }
    )
