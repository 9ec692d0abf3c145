"""
Reading per-study result files and writing the meta-analysis table.

The meta-analysis table uses the layout of R's ``write.table`` with row
names: the header lists only the column labels, every body line starts with
the variant identifier.
"""

import csv
import logging
import os
import tempfile
from pathlib import Path

import pandas as pd

from multimeta.config.settings import get_settings
from multimeta.data.results import MULTI_RES_KIND, StudyResult

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"


def read_study_result(path, name=None, sep=None, variant_column=None,
                      pvalue_column=None, kind=MULTI_RES_KIND):
    """
    Load one study's multivariate GWA results.

    Parameters
    ----------
    path : str or Path
        Delimited text file with one row per variant.
    name : str, optional
        Study label. Defaults to the file stem.
    sep : str, optional
        Field separator. Uses settings default (tab) if None.
    variant_column : str, optional
        Column holding variant identifiers. When None the first column is
        used, which also covers headers written one field short.
    pvalue_column : str, optional
        Column holding the multivariate p-values. It is renamed to ``P.F``.
    kind : str
        Result-kind tag given to the loaded study.

    Returns
    -------
    StudyResult
    """
    settings = get_settings()
    path = Path(path)
    sep = sep if sep is not None else settings.SEPARATOR
    name = name if name is not None else path.stem

    table = pd.read_csv(path, sep=sep, index_col=variant_column)
    if variant_column is None and isinstance(table.index, pd.RangeIndex):
        table = table.set_index(table.columns[0])
    table.index = table.index.astype(str)
    table.index.name = None

    if pvalue_column is not None and pvalue_column != settings.PVALUE_COLUMN:
        table = table.rename(columns={pvalue_column: settings.PVALUE_COLUMN})

    logger.info(f"Loaded {len(table)} variants for study {name!r} from {path}")
    return StudyResult(table, name=name, kind=kind)


def write_meta_table(table, path, sep=None, float_format=None):
    """
    Write the meta-analysis table as plain delimited text.

    Parameters
    ----------
    table : pd.DataFrame
        Meta-analysis results indexed by variant.
    path : str or Path
        Destination file.
    sep : str, optional
        Field separator. Uses settings default (tab) if None.
    float_format : str, optional
        printf-style format for floats. Shortest round-trip repr if None.

    Fields are never quoted. A separator or quote character inside
    a variant identifier is escaped with a backslash. The table is written to a
    temporary file next to ``path`` and moved into place, so a failed write
    leaves no partial file.

    Returns
    -------
    Path
        The written file.
    """
    settings = get_settings()
    path = Path(path)
    sep = sep if sep is not None else settings.SEPARATOR
    float_format = float_format if float_format is not None else settings.FLOAT_FORMAT

    body = table.to_csv(
        sep=sep,
        header=False,
        index=True,
        na_rep=settings.NA_REP,
        float_format=float_format,
        lineterminator="\n",
        quoting=csv.QUOTE_NONE,
        escapechar=ESCAPE_CHAR,
    )
    header = sep.join(str(col) for col in table.columns) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=path.name + ".tmp.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(header)
            f.write(body)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

    logger.info(f"Wrote {len(table)} variants to {path}")
    return path


def read_meta_table(path, sep=None):
    """Read a table written by :func:`write_meta_table` back into a DataFrame."""
    settings = get_settings()
    sep = sep if sep is not None else settings.SEPARATOR

    with open(path, encoding="utf-8") as f:
        columns = f.readline().rstrip("\n").split(sep)

    table = pd.read_csv(
        path,
        sep=sep,
        header=None,
        skiprows=1,
        index_col=0,
        dtype={0: str},
        na_values={i: [settings.NA_REP] for i in range(1, len(columns) + 1)},
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        escapechar=ESCAPE_CHAR,
    )
    table.index.name = None
    table.columns = columns
    return table.astype(float)
