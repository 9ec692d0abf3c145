"""
Tests for meta-analysis diagnostics.
"""

import math

import numpy as np
import pytest

from multimeta.analysis.diagnostics import genomic_inflation, qq_plot
from multimeta.utils.plot_manager import PlotManager


def uniform_quantiles(n):
    return (np.arange(1, n + 1) - 0.5) / n


def test_inflation_of_null_pvalues_is_one():
    assert genomic_inflation(uniform_quantiles(1001)) == pytest.approx(1.0, rel=1e-6)


def test_inflation_above_one_for_enriched_pvalues():
    assert genomic_inflation(uniform_quantiles(1001) ** 2) > 1.5


def test_inflation_ignores_invalid_values():
    values = np.concatenate([uniform_quantiles(1001), [0.0, -1.0, np.nan, 2.0]])
    assert genomic_inflation(values) == pytest.approx(1.0, rel=1e-6)


def test_inflation_without_valid_values():
    assert math.isnan(genomic_inflation([np.nan, 0.0]))


def test_qq_plot_saved_with_manifest(tmp_path):
    manager = PlotManager(base_dir=tmp_path / "plots", dpi=50)
    saved = qq_plot(uniform_quantiles(200), plot_manager=manager, file_formats=["png"])
    assert saved == [str(tmp_path / "plots" / "qq" / "qq_p_meta.png")]
    manifest = (tmp_path / "plots" / "plot_manifest.txt").read_text()
    assert "qq | qq_p_meta" in manifest


def test_unknown_category_falls_back(tmp_path):
    manager = PlotManager(base_dir=tmp_path / "plots", dpi=50)
    fig, ax = manager.create_figure()
    ax.plot([0, 1], [0, 1])
    saved = manager.save_plot(fig, "line", category="nope", file_formats=["png"])
    assert saved == [str(tmp_path / "plots" / "supplementary" / "line.png")]
