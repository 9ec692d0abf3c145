"""Meta-analysis and diagnostics."""
