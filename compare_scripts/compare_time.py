"""
Calendar and Sidereal Time Comparison Script

Compares libskyalign's calendar conversions with pyswisseph (modern dates)
and ERFA (dates back to -4799), and its GMST with ERFA's IAU 1982 GMST.
"""

import sys

import erfa
import swisseph as swe

import libskyalign as sky
from comparison_utils import (
    HISTORICAL_DATES,
    MODERN_DATES,
    TestStatistics,
    Tolerances,
    format_diff,
    format_status,
    parse_args,
    print_header,
)


def compare_julday(name, year, month, day, hour, reference, stats, verbose=False):
    """Julian Day against a reference implementation."""
    if reference == "SWE":
        jd_ref = swe.julday(year, month, day, hour, swe.GREG_CAL)
    else:
        djm0, djm = erfa.cal2jd(year, month, day)
        jd_ref = float(djm0) + float(djm) + hour / 24.0

    jd_py = sky.julday(year, month, day, hour)
    diff = abs(jd_py - jd_ref)
    passed = diff < Tolerances.JULIAN_DAY
    stats.add_result(passed, diff)

    print(
        f"[{name:<20}] [{reference}] julday  {year:6d}-{month:02d}-{day:02d} "
        f"REF={jd_ref:16.6f} PY={jd_py:16.6f} Diff={format_diff(diff, 2)} {format_status(passed)}"
    )


def compare_revjul(name, year, month, day, hour, stats, verbose=False):
    """Round trip through revjul, checked against pyswisseph for CE dates."""
    jd = sky.julday(year, month, day, hour)
    y, m, d, h = sky.revjul(jd)
    if year > 0:
        expected = swe.revjul(jd, swe.GREG_CAL)
    else:
        expected = (year, month, day, hour)

    diff = abs(h - expected[3])
    passed = (y, m, d) == tuple(expected[:3]) and diff < Tolerances.HOUR
    stats.add_result(passed, diff)

    if verbose or not passed:
        print(
            f"[{name:<20}] revjul  JD={jd:16.6f} -> {y}-{m:02d}-{d:02d} {h:.6f}h "
            f"expected {expected[0]}-{expected[1]:02d}-{expected[2]:02d} {format_status(passed)}"
        )


def compare_gmst(name, year, month, day, hour, stats, verbose=False):
    """GMST against erfa.gmst82."""
    jd = sky.julday(year, month, day, hour)
    g_ref = float(erfa.gmst82(jd, 0.0))
    g_py = float(sky.gmst_radians(jd))

    diff = abs(g_ref - g_py) % sky.TAU
    diff = min(diff, sky.TAU - diff)
    passed = diff < Tolerances.GMST
    stats.add_result(passed, diff)

    print(
        f"[{name:<20}] gmst    JD={jd:16.6f} REF={g_ref:.9f} PY={g_py:.9f} "
        f"Diff={format_diff(diff, 2)} {format_status(passed)}"
    )


def run_all_comparisons(verbose: bool = False) -> tuple:
    """
    Run all calendar and sidereal time comparisons.

    Returns:
        (passed_count, total_count)
    """
    print_header("CALENDAR AND SIDEREAL TIME COMPARISON")

    stats = TestStatistics()

    print("\n--- Julian Day ---\n")
    for name, year, month, day, hour in MODERN_DATES:
        compare_julday(name, year, month, day, hour, "SWE", stats, verbose)
    for name, year, month, day, hour in MODERN_DATES + HISTORICAL_DATES:
        compare_julday(name, year, month, day, hour, "ERFA", stats, verbose)

    print("\n--- Reverse Julian Day ---\n")
    for name, year, month, day, hour in MODERN_DATES + HISTORICAL_DATES:
        compare_revjul(name, year, month, day, hour, stats, verbose)

    print("\n--- Greenwich Mean Sidereal Time ---\n")
    for name, year, month, day, hour in MODERN_DATES:
        compare_gmst(name, year, month, day, hour, stats, verbose)

    stats.print_summary("CALENDAR AND SIDEREAL TIME SUMMARY")
    return stats.passed, stats.total


def print_help():
    """Print usage help."""
    print("Usage: python compare_time.py [OPTIONS]")
    print()
    print("Options:")
    print("  -v, --verbose           Show detailed output for each test")
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
