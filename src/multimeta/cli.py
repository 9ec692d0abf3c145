"""
Command line interface for multivariate GWAS meta-analysis.
"""

import argparse
import logging
import sys

from multimeta.analysis.diagnostics import genomic_inflation, qq_plot
from multimeta.analysis.meta_analysis import MetaCombiner
from multimeta.config.settings import get_settings
from multimeta.data.io import read_study_result
from multimeta.data.results import StudyCollection
from multimeta.exceptions import MultiMetaError
from multimeta.utils.plot_manager import PlotManager
from multimeta.utils.progress import configure_logging

logger = logging.getLogger(__name__)


def build_parser():
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog='multimeta',
        description='Meta-analysis of multivariate GWA scans by Fisher\'s method'
    )
    parser.add_argument('studies', nargs='+', metavar='STUDY_FILE',
                        help='Per-study multivariate GWA result files')
    parser.add_argument('--names', nargs='+', metavar='NAME',
                        help='Study labels, one per file (default: Study.1 .. Study.k)')
    parser.add_argument('--outfile', default=settings.DEFAULT_OUTFILE,
                        help='Output file (default: %(default)s)')
    parser.add_argument('--sep', default=settings.SEPARATOR,
                        help='Field separator of the input files (default: tab)')
    parser.add_argument('--variant-column',
                        help='Column with variant identifiers (default: first column)')
    parser.add_argument('--pvalue-column', default=settings.PVALUE_COLUMN,
                        help='Column with multivariate p-values (default: %(default)s)')
    parser.add_argument('--qq-plot', action='store_true',
                        help='Save a QQ plot of the meta-analysis p-values')
    parser.add_argument('--plots-dir', default=None,
                        help='Directory for plots (default: MULTIMETA_PLOTS_DIR or ./plots)')
    parser.add_argument('--log-level', default=settings.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: %(default)s)')
    return parser


def main(argv=None):
    """Run the meta-analysis from the command line. Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.names is not None and len(args.names) != len(args.studies):
        parser.error(f"--names got {len(args.names)} labels for {len(args.studies)} files")

    settings = get_settings()
    try:
        studies = [
            read_study_result(path, sep=args.sep,
                              variant_column=args.variant_column,
                              pvalue_column=args.pvalue_column)
            for path in args.studies
        ]
        combiner = MetaCombiner(settings=settings)
        table = combiner.run(StudyCollection(studies, names=args.names), args.outfile)
    except MultiMetaError as e:
        logger.error(str(e))
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"could not read study results: {e}")
        return 1

    p_meta = table[settings.META_COLUMN]
    logger.info(
        f"Meta-analysis of {len(args.studies)} studies: {len(table)} common variants, "
        f"lambda = {genomic_inflation(p_meta):.3f}"
    )

    if args.qq_plot:
        qq_plot(p_meta, plot_manager=PlotManager(base_dir=args.plots_dir))

    return 0


if __name__ == '__main__':
    sys.exit(main())
