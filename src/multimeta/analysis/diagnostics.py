"""
Diagnostics for meta-analysis p-values: genomic inflation and QQ plots.
"""

import logging

import numpy as np
from scipy import stats

from multimeta.utils.plot_manager import PlotManager

logger = logging.getLogger(__name__)


def _valid_pvalues(pvalues):
    pvalues = np.asarray(pvalues, dtype=float).ravel()
    return pvalues[np.isfinite(pvalues) & (pvalues > 0) & (pvalues <= 1)]


def genomic_inflation(pvalues):
    """
    Genomic inflation factor (lambda GC) of a set of p-values.

    Ratio of the median 1-df chi-squared statistic implied by the p-values
    to its expected median under the null. P-values outside (0, 1] are
    ignored; returns NaN when nothing is left.
    """
    pvalues = _valid_pvalues(pvalues)
    if pvalues.size == 0:
        return float("nan")
    observed = np.median(stats.chi2.isf(pvalues, 1))
    return float(observed / stats.chi2.ppf(0.5, 1))


def qq_plot(pvalues, title="Meta-analysis QQ plot", plot_manager=None,
            filename="qq_p_meta", file_formats=None):
    """
    QQ plot of observed against expected -log10 p-values.

    Parameters
    ----------
    pvalues : array-like
        P-values to plot, typically the ``p.meta`` column.
    title : str
        Plot title.
    plot_manager : PlotManager, optional
        Where to save the figure. A default manager is created if None.
    filename : str
        File name without extension.
    file_formats : list, optional
        Formats to save.

    Returns
    -------
    list of str
        Saved file paths.
    """
    plot_manager = plot_manager or PlotManager()
    valid = _valid_pvalues(pvalues)
    dropped = np.asarray(pvalues).size - valid.size
    if dropped:
        logger.warning(f"QQ plot: ignoring {dropped} p-values outside (0, 1]")

    n = valid.size
    observed = -np.log10(np.sort(valid))
    expected = -np.log10((np.arange(1, n + 1) - 0.5) / n)
    lam = genomic_inflation(valid)

    fig, ax = plot_manager.create_figure()
    ax.scatter(expected, observed, s=8, color='steelblue', alpha=0.7, edgecolors='none')
    if n:
        upper = max(expected.max(), observed.max())
        ax.plot([0, upper], [0, upper], color='red', linestyle='--', linewidth=1)
    ax.set_xlabel('Expected -log10(p)')
    ax.set_ylabel('Observed -log10(p)')
    ax.set_title(title)
    ax.text(0.05, 0.95, f"lambda = {lam:.3f}", transform=ax.transAxes,
            va='top', ha='left')

    return plot_manager.save_plot(
        fig, filename, category='qq',
        description=f"{title} ({n} variants, lambda={lam:.3f})",
        file_formats=file_formats,
    )
