"""
Centralized configuration settings for multivariate GWAS meta-analysis.
"""

from pathlib import Path
from typing import Optional
import os


class Settings:
    """Global settings for the meta-analysis."""

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize settings.

        Parameters
        ----------
        base_dir : Path, optional
            Directory that relative output paths are resolved against.
            If None, relative paths stay relative to the working directory
            at the time they are used.
        """
        self.BASE_DIR = Path(base_dir) if base_dir is not None else None

        # Result conventions of the upstream multivariate scan
        self.RESULT_KIND = "MultiRes"
        self.PVALUE_COLUMN = "P.F"
        self.META_COLUMN = "p.meta"
        self.LABEL_PREFIX = "Study"

        # Output file
        self.DEFAULT_OUTFILE = os.getenv(
            "MULTIMETA_OUTFILE", "Multivariate_meta-analysis_results.txt"
        )
        self.SEPARATOR = os.getenv("MULTIMETA_SEP", "\t")
        self.FLOAT_FORMAT = os.getenv("MULTIMETA_FLOAT_FORMAT") or None
        self.NA_REP = "NA"

        # Plotting parameters
        self.PLOTS_DIR = self._resolve(os.getenv("MULTIMETA_PLOTS_DIR", "plots"))
        self.PLOT_DPI = int(os.getenv("PLOT_DPI", "300"))
        self.PLOT_FORMAT = os.getenv("PLOT_FORMAT", "pdf,png").split(",")

        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    def _resolve(self, path) -> Path:
        path = Path(path)
        if self.BASE_DIR is not None and not path.is_absolute():
            path = self.BASE_DIR / path
        return path

    def get_output_path(self, outfile=None) -> Path:
        """Meta-analysis output file, joined to BASE_DIR only when one was given."""
        return self._resolve(outfile if outfile is not None else self.DEFAULT_OUTFILE)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(base_dir: Optional[Path] = None) -> Settings:
    """
    Get global settings instance (singleton pattern).

    Parameters
    ----------
    base_dir : Path, optional
        Base directory for output paths. Only used on first call.

    Returns
    -------
    Settings
        Global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings(base_dir)
    return _settings


def reset_settings():
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
