"""
Long-Term Precession Comparison Script

Compares libskyalign's Vondrák et al. (2011) precession with ERFA
(eraLtp, eraLtpecl, eraLtpequ) across +/-200,000 years, and the
precessed positions of the named targets with erfa.ltp applied to the
same J2000 vectors.
"""

import sys

import erfa
import numpy as np

import libskyalign as sky
from comparison_utils import (
    EPOCHS,
    TestStatistics,
    Tolerances,
    angular_diff,
    format_coord,
    format_diff,
    format_status,
    parse_args,
    print_header,
)


def compare_matrices(epoch: float, stats: TestStatistics, verbose: bool = False):
    """Pole vectors and matrix against ERFA."""
    checks = (
        ("pecl", np.array(sky.ltp_pecl(epoch)), erfa.ltpecl(epoch)),
        ("pequ", np.array(sky.ltp_pequ(epoch)), erfa.ltpequ(epoch)),
        ("pmat", np.array(sky.ltp_pmat(epoch)), erfa.ltp(epoch)),
    )
    for label, ours, ref in checks:
        diff = float(np.max(np.abs(ours - ref)))
        passed = diff < Tolerances.PRECESSION
        stats.add_result(passed, diff)
        print(
            f"[epoch {epoch:11.1f}] {label}  MaxDiff={format_diff(diff, 2)} {format_status(passed)}"
        )


def compare_targets(epoch: float, stats: TestStatistics, verbose: bool = False):
    """Precessed RA/Dec of each named target against erfa.ltp."""
    rp = sky.ltp_pmat(epoch)
    rp_ref = erfa.ltp(epoch)

    for key, target in sky.FIXED_STARS.items():
        ra, dec = sky.precess_radec(target.ra_j2000, target.dec_j2000, rp)
        v = erfa.s2c(target.ra_j2000, target.dec_j2000)
        ra_ref, dec_ref = erfa.c2s(rp_ref @ v)

        d_ra = angular_diff(np.degrees(ra), np.degrees(erfa.anp(ra_ref)))
        d_dec = abs(np.degrees(dec) - np.degrees(dec_ref))
        diff = max(d_ra * np.cos(dec), d_dec)
        passed = diff < Tolerances.STAR_POSITION
        stats.add_result(passed, diff)

        if verbose or not passed:
            print(
                f"[epoch {epoch:11.1f}] {target.name:<8} "
                f"RA={format_coord(np.degrees(ra))} Dec={format_coord(np.degrees(dec))} "
                f"Diff={format_diff(diff, 2)} {format_status(passed)}"
            )


def run_all_comparisons(verbose: bool = False) -> tuple:
    """
    Run all precession comparisons.

    Returns:
        (passed_count, total_count)
    """
    print_header("LONG-TERM PRECESSION COMPARISON")

    stats = TestStatistics()

    print("\n--- Pole vectors and matrix ---\n")
    for epoch in EPOCHS:
        compare_matrices(epoch, stats, verbose)

    print("\n--- Named targets ---\n")
    for epoch in EPOCHS:
        compare_targets(epoch, stats, verbose)

    stats.print_summary("PRECESSION COMPARISON SUMMARY")
    return stats.passed, stats.total


def print_help():
    """Print usage help."""
    print("Usage: python compare_precession.py [OPTIONS]")
    print()
    print("Options:")
    print("  -v, --verbose           Show every target position")
    print("  -h, --help              Show this help message")
    print()


def main():
    """Main entry point."""
    args = parse_args(sys.argv)

    if args["help"]:
        print_help()
        sys.exit(0)

    passed, total = run_all_comparisons(verbose=args["verbose"])
    sys.exit(0 if passed == total else 1)


if __name__ == "__main__":
    main()
