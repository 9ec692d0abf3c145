#!/usr/bin/env python3
"""Run the multivariate GWAS meta-analysis on per-study result files."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from multimeta.cli import main

if __name__ == "__main__":
    sys.exit(main())
