"""
Multivariate GWAS Meta-Analysis Package

Combines multivariate genome-wide association scans from independent
studies into one meta-analysis p-value per variant (Fisher's method).
"""

__version__ = "0.1.0"
__author__ = "MultiMeta Development Team"

# Import key components for easy access
from multimeta.analysis.meta_analysis import MetaCombiner, multi_meta
from multimeta.data.results import MULTI_RES_KIND, StudyCollection, StudyResult

__all__ = [
    "MetaCombiner",
    "multi_meta",
    "StudyResult",
    "StudyCollection",
    "MULTI_RES_KIND",
]
