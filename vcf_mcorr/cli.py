"""Command line interface for vcf_mcorr.

Current subcommands:
	corr – compute the P2 / Ks correlation profile of a VCF and write it as CSV
	plot – render a previously written profile CSV

Example:
	python -m vcf_mcorr.cli corr input.vcf.gz out/sample.csv --max-corr-length 300
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from . import __version__
from .core import CorrelationConfig, DEFAULT_MAX_LAG, DEFAULT_REGION_START
from .io import VariantStream
from .metrics import compute_correlation_profile, read_profile_csv, write_profile_csv


def cmd_corr(args: argparse.Namespace) -> None:
	config = CorrelationConfig(
		max_lag=args.max_corr_length,
		region_start=args.region_start,
		region_end=args.region_end,
	)
	stream = VariantStream(args.vcf, max_records=args.max_records)
	start = time.time()
	profile = compute_correlation_profile(stream, config, verbose=not args.quiet)
	out_path = write_profile_csv(profile, args.out)
	if not args.quiet:
		print(f"[INFO] {len(profile):,} lags written to {out_path} in {time.time() - start:.1f}s")

	if args.plot:
		from .plot import plot_p2_curve  # local import
		png_path = Path(out_path).with_suffix(".png")
		plot_p2_curve(profile, output_path=png_path, title=f"P2 profile: {Path(args.vcf).name}")
		if not args.quiet:
			print(f"[INFO] Plot written to {png_path}")


def cmd_plot(args: argparse.Namespace) -> None:
	from .plot import plot_p2_curve  # local import

	profile = read_profile_csv(args.csv)
	out = args.out or str(Path(args.csv).with_suffix(".png"))
	plot_p2_curve(profile, output_path=out, logx=args.logx)
	print(f"[INFO] Plot written to {out}")


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="vcf-mcorr", description="Calculate mutational correlation from VCF files.")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	sub = p.add_subparsers(dest="command")

	sp = sub.add_parser("corr", help="Compute the correlation profile of a VCF")
	sp.add_argument("vcf", help="Input VCF or VCF.GZ file ('-' for stdin), position-sorted")
	sp.add_argument("out", help="Output CSV path")
	sp.add_argument("--max-corr-length", type=int, default=DEFAULT_MAX_LAG, help="Max length of correlations in bp (default: %(default)s)")
	sp.add_argument("--region-start", type=int, default=DEFAULT_REGION_START, help="Region start, inclusive (default: %(default)s)")
	sp.add_argument("--region-end", type=int, default=None, help="Region end, inclusive (default: unbounded)")
	sp.add_argument("--max-records", type=int, default=None, help="Limit number of SNP records parsed (debug)")
	sp.add_argument("--plot", action="store_true", help="Also render the P2 curve next to the CSV")
	sp.add_argument("--quiet", action="store_true", help="Suppress progress output")
	sp.set_defaults(func=cmd_corr)

	sp2 = sub.add_parser("plot", help="Plot a correlation profile CSV")
	sp2.add_argument("csv", help="Profile CSV written by 'corr'")
	sp2.add_argument("--out", default=None, help="Output PNG (default: CSV path with .png suffix)")
	sp2.add_argument("--logx", action="store_true", help="Logarithmic lag axis")
	sp2.set_defaults(func=cmd_plot)
	return p


def main(argv=None):
	parser = build_parser()
	args = parser.parse_args(argv)
	if not hasattr(args, 'func'):
		parser.print_help()
		return 1
	try:
		args.func(args)
	except ValueError as exc:
		# Covers VCFFormatError / UnsortedInputError: no partial output is written
		parser.exit(2, f"[ERROR] {exc}\n")
	return 0


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
