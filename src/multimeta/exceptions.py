"""
Error types raised by the meta-analysis.

Every failure is fatal to the current invocation; nothing is retried.
"""


class MultiMetaError(Exception):
    """Base class for all meta-analysis errors."""


class InsufficientStudiesError(MultiMetaError, ValueError):
    """Fewer than two studies were supplied."""

    def __init__(self, n_studies):
        self.n_studies = n_studies
        super().__init__(
            f"checking data: not enough studies for meta-analysis "
            f"(got {n_studies}, need at least 2)"
        )


class InvalidResultTypeError(MultiMetaError, TypeError):
    """A study is not tagged as a multivariate GWA result."""

    def __init__(self, index, kind, expected):
        self.index = index
        self.kind = kind
        self.expected = expected
        super().__init__(
            f"checking data: incorrect class of results for study at "
            f"position {index} (got {kind!r}, expected {expected!r})"
        )


class NoCommonVariantsError(MultiMetaError, ValueError):
    """The studies share no variant identifier."""

    def __init__(self, n_studies):
        self.n_studies = n_studies
        super().__init__(
            f"checking data: no variant exists in all {n_studies} studies"
        )


class InconsistentDataError(MultiMetaError, ValueError):
    """A common variant could not be looked up in one of the studies."""

    def __init__(self, label, missing):
        self.label = label
        self.missing = list(missing)
        preview = ", ".join(map(str, self.missing[:5]))
        super().__init__(
            f"meta-analysis: {len(self.missing)} common variant(s) missing "
            f"from study {label!r} ({preview})"
        )


class MissingPValueColumnError(MultiMetaError, ValueError):
    """A study table has no p-value column."""

    def __init__(self, column, name=None):
        self.column = column
        self.name = name
        where = f" of study {name!r}" if name else ""
        super().__init__(f"p-value column {column!r} not found in result table{where}")


class DuplicateVariantError(MultiMetaError, ValueError):
    """A study table lists the same variant more than once."""

    def __init__(self, duplicates, name=None):
        self.duplicates = list(duplicates)
        self.name = name
        where = f" in study {name!r}" if name else ""
        preview = ", ".join(map(str, self.duplicates[:5]))
        super().__init__(f"duplicated variant identifiers{where}: {preview}")


class ResultWriteError(MultiMetaError, OSError):
    """Writing the results failed after the meta-analysis was computed.

    The computed table is kept on ``table`` so callers can still use it.
    """

    def __init__(self, path, table, cause):
        self.path = path
        self.table = table
        super().__init__(f"writing results: could not write {path}: {cause}")
