"""Fixtures for manual p-value annotation tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest


def pytest_configure() -> None:
    # Ensure pvalueplot package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def pairwise_df() -> pd.DataFrame:
    """Pairwise comparisons between three doses (no y.position column)."""
    return pd.DataFrame({
        "group1": ["0.5", "0.5", "1"],
        "group2": ["1", "2", "2"],
        "p.adj": [0.001, 0.02, 0.04],
    })


@pytest.fixture
def reference_df() -> pd.DataFrame:
    """Comparisons of two doses against the shared 0.5 reference group."""
    return pd.DataFrame({
        "group1": ["0.5", "0.5"],
        "group2": ["1", "2"],
        "p": [0.003, 0.0001],
        "y.position": [30.0, 34.0],
    })
