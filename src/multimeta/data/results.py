"""
Per-study multivariate GWA results and ordered collections of them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from multimeta.config.settings import get_settings
from multimeta.exceptions import DuplicateVariantError, MissingPValueColumnError

MULTI_RES_KIND = "MultiRes"


@dataclass(frozen=True, eq=False)
class StudyResult:
    """
    Result table of one multivariate genome-wide association scan.

    Parameters
    ----------
    table : pd.DataFrame
        Rows indexed by variant identifier, one column per statistic.
        Must contain the p-value column (``"P.F"``).
    name : str, optional
        Study label used as the column name in the meta-analysis table.
    kind : str
        Result-kind tag. Only ``"MultiRes"`` results can be meta-analysed.
    """

    table: pd.DataFrame
    name: Optional[str] = None
    kind: str = MULTI_RES_KIND
    pvalue_column: str = field(default_factory=lambda: get_settings().PVALUE_COLUMN)

    def __post_init__(self):
        if self.pvalue_column not in self.table.columns:
            raise MissingPValueColumnError(self.pvalue_column, self.name)
        duplicated = self.table.index[self.table.index.duplicated()]
        if len(duplicated):
            raise DuplicateVariantError(duplicated.unique(), self.name)

    @property
    def variants(self) -> pd.Index:
        return self.table.index

    @property
    def pvalues(self) -> pd.Series:
        return self.table[self.pvalue_column]

    @property
    def n_variants(self) -> int:
        return len(self.table.index)

    def __repr__(self):
        label = f"{self.name!r}, " if self.name else ""
        return f"StudyResult({label}kind={self.kind!r}, n_variants={self.n_variants})"


class StudyCollection(Sequence):
    """
    Ordered studies entering one meta-analysis.

    Built from a list of studies (unnamed) or a mapping of label to study
    (named). Explicit ``names`` override both. Labels are used verbatim.
    """

    def __init__(self, studies, names: Optional[Iterable[str]] = None):
        if isinstance(studies, StudyCollection):
            if names is None:
                names = studies.names
            studies = list(studies)
        elif isinstance(studies, Mapping):
            if names is None:
                names = [str(label) for label in studies.keys()]
            studies = list(studies.values())
        else:
            studies = list(studies)

        if names is not None:
            names = [str(n) for n in names]
            if len(names) != len(studies):
                raise ValueError(
                    f"got {len(names)} study names for {len(studies)} studies"
                )

        self._studies = studies
        self._names = names

    @property
    def names(self) -> Optional[List[str]]:
        """Labels supplied by the caller, or None when the studies are unnamed."""
        return None if self._names is None else list(self._names)

    @property
    def is_named(self) -> bool:
        return self._names is not None

    def labels(self) -> List[str]:
        """Study labels; ``Study.1 .. Study.k`` when no names were given."""
        if self._names is not None:
            return list(self._names)
        prefix = get_settings().LABEL_PREFIX
        return [f"{prefix}.{i}" for i in range(1, len(self._studies) + 1)]

    def __getitem__(self, index):
        return self._studies[index]

    def __len__(self):
        return len(self._studies)

    def __repr__(self):
        return f"StudyCollection({self.labels()!r})"
