"""Command-line entry points for the IDAQ lab toolkit."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from .archive import save_submission
from .comparison import compare
from .config import DEFAULT_ALPHA, DEFAULT_RATIO_THRESHOLD, VARIANCE_TESTS, ComparisonConfig
from .data_processing import (
    extract_column,
    extract_long_groups,
    extract_wide_groups,
    load_measurements,
)
from .phase import phase_difference
from .schema import InsufficientDataError

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        prog="idaq",
        description="Instrumentation and data acquisition lab toolkit.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ttest = sub.add_parser(
        "ttest", help="Compare the means of two measurement sets with an automated report."
    )
    ttest.add_argument("--input", required=True, help="Path to input CSV file.")
    ttest.add_argument("--group1", help="Column holding group-1 measurements (wide layout).")
    ttest.add_argument("--group2", help="Column holding group-2 measurements (wide layout).")
    ttest.add_argument("--by", help="Grouping column (long layout, exactly two groups).")
    ttest.add_argument("--value", help="Value column (long layout).")
    ttest.add_argument(
        "--alpha",
        type=float,
        default=DEFAULT_ALPHA,
        help=f"Significance level (default: {DEFAULT_ALPHA}).",
    )
    ttest.add_argument(
        "--ratio-threshold",
        type=float,
        default=DEFAULT_RATIO_THRESHOLD,
        help="Variance ratio above which the fallback treats variances as unequal.",
    )
    ttest.add_argument(
        "--variance-test",
        choices=VARIANCE_TESTS,
        default="auto",
        help="Variance-equality method (default: auto).",
    )
    ttest.add_argument("--plot", default=None, help="Optional path for a box-plot PNG.")

    phase = sub.add_parser(
        "phase", help="Phase difference (degrees) at the dominant frequency."
    )
    phase.add_argument("--input", required=True, help="Path to input CSV file.")
    phase.add_argument("--primary", required=True, help="Excitation/reference column.")
    phase.add_argument("--secondary", required=True, help="LVDT output column.")
    phase.add_argument("--fs", type=float, required=True, help="Sampling frequency (Hz).")

    save = sub.add_parser("save", help="Bundle the working directory into a ZIP file.")
    save.add_argument("name", nargs="?", default=None, help="Output ZIP file name.")
    save.add_argument("--directory", default=".", help="Directory to bundle (default: .).")
    save.add_argument(
        "--no-figures", action="store_true", help="Do not include open figures."
    )
    return parser


def _load_groups(args: argparse.Namespace):
    df = load_measurements(args.input)
    if args.by or args.value:
        if not (args.by and args.value):
            raise ValueError("--by and --value must be given together.")
        _, data1, data2 = extract_long_groups(df, args.by, args.value)
        return data1, data2
    if not (args.group1 and args.group2):
        raise ValueError("Provide --group1/--group2 or --by/--value.")
    return extract_wide_groups(df, args.group1, args.group2)


def _run_ttest(args: argparse.Namespace) -> int:
    data1, data2 = _load_groups(args)
    config = ComparisonConfig(
        alpha=args.alpha,
        ratio_threshold=args.ratio_threshold,
        variance_test=args.variance_test,
    )
    try:
        _, p_value, _, _ = compare(data1, data2, config=config)
    except InsufficientDataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.plot:
        from .plotting import plot_comparison

        plot_comparison(data1, data2, p_value, output_path=args.plot)
        print(f"Saved box plot to {args.plot}")
    return 0


def _run_phase(args: argparse.Namespace) -> int:
    df = load_measurements(args.input)
    primary = extract_column(df, args.primary)
    secondary = extract_column(df, args.secondary)
    mask = np.isfinite(primary) & np.isfinite(secondary)
    phase_deg = phase_difference(primary[mask], secondary[mask], args.fs)
    for value in phase_deg:
        print(f"Phase difference: {value:.2f} deg")
    return 0


def _run_save(args: argparse.Namespace) -> int:
    path = save_submission(
        args.name, directory=args.directory, include_figures=not args.no_figures
    )
    print(f"Saved submission to {path}")
    return 0


_COMMANDS = {"ttest": _run_ttest, "phase": _run_phase, "save": _run_save}


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logger.debug("Running command %s", args.command)
    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
