"""Configuration management for multivariate GWAS meta-analysis."""

from multimeta.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
