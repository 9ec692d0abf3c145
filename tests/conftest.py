"""
Pytest configuration and fixtures for multimeta tests.
"""

import pytest
from pathlib import Path
import sys

import pandas as pd

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from multimeta.config.settings import reset_settings  # noqa: E402
from multimeta.data.results import StudyResult  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test in its own directory with freshly read settings."""
    monkeypatch.chdir(tmp_path)
    for var in ("MULTIMETA_OUTFILE", "MULTIMETA_SEP", "MULTIMETA_FLOAT_FORMAT",
                "MULTIMETA_PLOTS_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def project_root():
    """Return project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_settings():
    """Return sample settings for testing."""
    from multimeta.config.settings import get_settings
    return get_settings()


@pytest.fixture
def make_study():
    """Build a StudyResult from a {variant: p-value} mapping."""
    def _make(pvalues, name=None, kind="MultiRes", **extra_columns):
        table = pd.DataFrame({"P.F": pd.Series(pvalues, dtype=float)})
        for column, values in extra_columns.items():
            table[column] = pd.Series(values, dtype=float)
        return StudyResult(table, name=name, kind=kind)
    return _make


@pytest.fixture
def three_studies(make_study):
    """Three studies with partly overlapping variants."""
    study1 = make_study({"rs1": 0.01, "rs2": 0.5, "rs3": 0.2, "rs4": 0.9, "rs5": 1e-8})
    study2 = make_study({"rs5": 0.03, "rs3": 0.4, "rs1": 0.02, "rs2": 0.5, "rs9": 0.1})
    study3 = make_study({"rs2": 0.5, "rs1": 0.3, "rs5": 2e-4, "rs3": 0.7, "rs4": 0.6})
    return [study1, study2, study3]


@pytest.fixture
def write_study_file(tmp_path):
    """Write a tab-separated study result file and return its path."""
    def _write(filename, rows, header=("SNP", "P.F", "beta")):
        path = tmp_path / filename
        lines = ["\t".join(header)]
        lines += ["\t".join(str(value) for value in row) for row in rows]
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
