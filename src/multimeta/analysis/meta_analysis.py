"""
Meta-analysis of multivariate genome-wide association scans.

P-values of the multivariate test (``P.F``) from several independent studies
are combined per variant with Fisher's method::

    X = -2 * sum(log(p_i)),   p.meta = P(chi2 with 2k df >= X)

Only variants present in every study are analysed.
"""

import logging

import numpy as np
import pandas as pd
from scipy import stats

from multimeta.config.settings import get_settings
from multimeta.data.io import write_meta_table
from multimeta.data.results import StudyCollection, StudyResult
from multimeta.exceptions import (
    InconsistentDataError,
    InsufficientStudiesError,
    InvalidResultTypeError,
    NoCommonVariantsError,
    ResultWriteError,
)
from multimeta.utils.progress import LoggingProgress

logger = logging.getLogger(__name__)


def validate_studies(studies, expected_kind=None):
    """
    Check that the studies can be meta-analysed.

    Parameters
    ----------
    studies : StudyCollection, list or dict of StudyResult
        Studies to combine. Dict keys are used as study labels.
    expected_kind : str, optional
        Required result-kind tag. Uses settings default (``"MultiRes"``) if None.

    Returns
    -------
    StudyCollection

    Raises
    ------
    InsufficientStudiesError
        Fewer than two studies.
    InvalidResultTypeError
        A study is not tagged with the expected kind.
    """
    expected_kind = expected_kind or get_settings().RESULT_KIND
    collection = StudyCollection(studies)

    if len(collection) < 2:
        raise InsufficientStudiesError(len(collection))

    for i, study in enumerate(collection):
        if not isinstance(study, StudyResult):
            raise InvalidResultTypeError(i, type(study).__name__, expected_kind)
        kind = study.kind
        if kind != expected_kind:
            raise InvalidResultTypeError(i, kind, expected_kind)

    return collection


def common_variants(collection):
    """
    Variants present in every study, in the order of the first study.

    Raises
    ------
    NoCommonVariantsError
        The intersection is empty.
    """
    common = collection[0].variants
    for study in collection[1:]:
        common = common[common.isin(study.variants)]

    if len(common) == 0:
        raise NoCommonVariantsError(len(collection))
    return common


def study_labels(collection):
    """Column labels for the studies: given names or ``Study.1 .. Study.k``."""
    return collection.labels()


def build_pvalue_matrix(collection, common, labels):
    """
    Per-study p-values restricted to the common variants.

    Returns
    -------
    pd.DataFrame
        Index ``common``, one column per study label, in study order.
    """
    columns = []
    for label, study in zip(labels, collection):
        missing = common[~common.isin(study.variants)]
        if len(missing):
            raise InconsistentDataError(label, missing)
        columns.append(study.pvalues.reindex(common).to_numpy(dtype=float))

    matrix = np.column_stack(columns)
    return pd.DataFrame(matrix, index=common.copy(), columns=list(labels))


def fisher_statistic(pvalues):
    """
    Fisher's combined statistic for each row of a p-value matrix.

    A p-value of 0 gives an infinite statistic; a p-value of 1 adds nothing.
    """
    pvalues = np.asarray(pvalues, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        return -2 * np.log(pvalues).sum(axis=1)


def fisher_combine(pvalues):
    """
    Combined p-value for each row of a ``n_variants x k`` p-value matrix.

    Values outside (0, 1] are not filtered; they propagate into the result
    (negative or missing p-values give NaN).
    """
    pvalues = np.asarray(pvalues, dtype=float)
    if pvalues.ndim != 2:
        raise ValueError("pvalues must be a 2-D array (variants x studies)")
    k = pvalues.shape[1]
    return stats.chi2.sf(fisher_statistic(pvalues), 2 * k)


class MetaCombiner:
    """
    Combine multivariate GWA scans by Fisher's method.

    :meth:`combine` computes the table without touching the filesystem,
    :meth:`write` persists it and :meth:`run` does both.

    Parameters
    ----------
    progress : callable, optional
        Called as ``progress(step, status)`` at each checkpoint. Logs the
        checkpoints if None.
    settings : Settings, optional
        Uses the global settings if None.
    """

    def __init__(self, progress=None, settings=None):
        self.settings = settings or get_settings()
        self.progress = progress if progress is not None else LoggingProgress()

    def combine(self, studies):
        """
        Meta-analyse the studies.

        Returns
        -------
        pd.DataFrame
            Rows are the common variants, columns the per-study p-values
            followed by ``p.meta``.
        """
        self.progress("validate", "start")
        collection = validate_studies(studies, self.settings.RESULT_KIND)
        common = common_variants(collection)
        self.progress("validate", "done")
        logger.debug(
            f"{len(common)} variants shared by {len(collection)} studies"
        )

        self.progress("combine", "start")
        labels = study_labels(collection)
        pmat = build_pvalue_matrix(collection, common, labels)
        p_meta = fisher_combine(pmat.to_numpy())
        table = pmat.copy()
        table.insert(len(table.columns), self.settings.META_COLUMN, p_meta,
                     allow_duplicates=True)
        self.progress("combine", "done")

        return table

    def write(self, table, outfile=None):
        """
        Write the meta-analysis table.

        Raises
        ------
        ResultWriteError
            The file could not be written; the table is kept on the error.
        """
        path = self.settings.get_output_path(outfile)
        self.progress("write", "start")
        try:
            write_meta_table(table, path, sep=self.settings.SEPARATOR,
                             float_format=self.settings.FLOAT_FORMAT)
        except OSError as e:
            raise ResultWriteError(path, table, e) from e
        self.progress("write", "done")
        return path

    def run(self, studies, outfile=None):
        """Combine the studies, write the results and return the table."""
        table = self.combine(studies)
        self.write(table, outfile)
        return table


def multi_meta(studies, outfile=None, progress=None):
    """
    Meta-analysis for multiple multivariate GWA scans.

    Parameters
    ----------
    studies : StudyCollection, list or dict of StudyResult
        At least two results tagged ``"MultiRes"``. Dict keys (or the names
        of a StudyCollection) become column labels; unnamed studies are
        labelled ``Study.1 .. Study.k``.
    outfile : str or Path, optional
        Output file. Defaults to ``Multivariate_meta-analysis_results.txt``.
    progress : callable, optional
        Checkpoint reporter, see :mod:`multimeta.utils.progress`.

    Returns
    -------
    pd.DataFrame
        Per-study p-values of the common variants plus ``p.meta``.

    Examples
    --------
    >>> meta = multi_meta([res1, res2])            # doctest: +SKIP
    >>> meta = multi_meta({"ERF": res1, "ORCADES": res2},
    ...                   outfile="meta.txt")      # doctest: +SKIP
    """
    return MetaCombiner(progress=progress).run(studies, outfile)
