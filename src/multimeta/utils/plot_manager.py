#!/usr/bin/env python3
"""
Plot Management System for multivariate GWAS meta-analysis
Centralized plot saving with organized directory structure
"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
import logging
from datetime import datetime

from multimeta.config.settings import get_settings

logger = logging.getLogger(__name__)


class PlotManager:
    """Centralized plot management system"""

    CATEGORIES = ('qq', 'supplementary')

    def __init__(self, base_dir=None, dpi=None, figsize=(6, 6)):
        settings = get_settings()
        self.base_dir = Path(base_dir) if base_dir else settings.PLOTS_DIR
        self.dpi = dpi if dpi else settings.PLOT_DPI
        self.figsize = figsize

        self.directories = {
            category: self.base_dir / category for category in self.CATEGORIES
        }
        for dir_path in self.directories.values():
            dir_path.mkdir(parents=True, exist_ok=True)

        sns.set_style('whitegrid')

        self.manifest_file = self.base_dir / 'plot_manifest.txt'
        if not self.manifest_file.exists():
            with open(self.manifest_file, 'w') as f:
                f.write(f"# Plot Manifest - Created {datetime.now()}\n")
                f.write("# Format: timestamp | category | filename | description\n\n")

    def save_plot(self, fig, filename, category='supplementary', description='',
                  file_formats=None, close_fig=True):
        """
        Save plot to organized directory structure

        Parameters:
        -----------
        fig : matplotlib.figure.Figure
            The figure to save
        filename : str
            Filename without extension
        category : str
            Plot category (qq, supplementary)
        description : str
            Plot description for manifest
        file_formats : list
            File formats to save. Uses settings default if None.
        close_fig : bool
            Whether to close figure after saving
        """
        if category not in self.directories:
            logger.warning(f"Unknown category '{category}'. Using 'supplementary'")
            category = 'supplementary'
        if file_formats is None:
            file_formats = get_settings().PLOT_FORMAT

        save_dir = self.directories[category]
        saved_files = []

        for fmt in file_formats:
            filepath = save_dir / f"{filename}.{fmt}"
            fig.savefig(
                filepath,
                dpi=self.dpi,
                bbox_inches='tight',
                format=fmt,
                facecolor='white',
                edgecolor='none'
            )
            saved_files.append(str(filepath))
            logger.info(f"Saved plot: {filepath}")

        self._update_manifest(category, filename, description, saved_files)

        if close_fig:
            plt.close(fig)

        return saved_files

    def create_figure(self, figsize=None, **kwargs):
        """Create a new figure with default settings"""
        if figsize is None:
            figsize = self.figsize

        fig, ax = plt.subplots(figsize=figsize, **kwargs)
        return fig, ax

    def _update_manifest(self, category, filename, description, saved_files):
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        with open(self.manifest_file, 'a') as f:
            f.write(f"{timestamp} | {category} | {filename} | {description}\n")
            for file_path in saved_files:
                f.write(f"    -> {file_path}\n")
