"""
Shared utilities for comparison scripts.

This module provides common classes, functions, and constants used across
all comparison scripts in the suite.
"""

from typing import List

# ============================================================================
# TOLERANCE THRESHOLDS
# ============================================================================


class Tolerances:
    """Tolerance thresholds for different comparison types."""

    # Calendar
    JULIAN_DAY = 1e-9  # days
    HOUR = 1e-6  # hours

    # Sidereal time (radians)
    GMST = 1e-6

    # Precession matrix elements and pole vectors
    PRECESSION = 1e-12

    # Star positions of date (degrees)
    STAR_POSITION = 1e-6

    # Approximate Sun model vs full ephemeris (degrees)
    SUN_APPROX = 0.5


# ============================================================================
# TEST SUBJECTS
# ============================================================================

# Format: (Name, Year, Month, Day, Hour)
MODERN_DATES = [
    ("Standard J2000", 2000, 1, 1, 12.0),
    ("Past", 1980, 5, 20, 14.5),
    ("Recent", 2024, 11, 5, 9.0),
    ("Mid-century", 1950, 10, 15, 22.0),
    ("Gregorian reform", 1582, 10, 15, 0.0),
]

HISTORICAL_DATES = [
    ("Ptolemaic", -100, 3, 21, 6.0),
    ("Great Pyramid", -2560, 6, 21, 0.0),
    ("Predynastic", -4000, 12, 31, 23.0),
    ("ERFA calendar limit", -4799, 1, 1, 0.0),
]

# Julian epochs spanning the validity of the long-term model
EPOCHS = [-198000.0, -40000.0, -10500.0, -2560.0, 0.0, 2000.0, 2100.0, 12000.0, 198000.0]

# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def angular_diff(val1: float, val2: float) -> float:
    """Calculate angular difference accounting for 360° wrap."""
    d = abs(val1 - val2) % 360.0
    if d > 180:
        d = 360 - d
    return d


def format_coord(value: float, decimals: int = 6, width: int = 10) -> str:
    """Format coordinate value with consistent width."""
    return f"{value:{width}.{decimals}f}"


def format_diff(value: float, decimals: int = 8, width: int = 10) -> str:
    """Format difference value with consistent width."""
    return f"{value:{width}.{decimals}e}"


def format_status(passed: bool) -> str:
    """Format pass/fail status."""
    return "✓" if passed else "✗"


# ============================================================================
# SUMMARY STATISTICS
# ============================================================================


class TestStatistics:
    """Tracks and reports test statistics."""

    def __init__(self):
        self.total = 0
        self.passed = 0
        self.failed = 0
        self.max_diff = 0.0
        self.diff_sum = 0.0

    def add_result(self, passed: bool, diff: float = 0.0):
        """Add a test result."""
        self.total += 1
        if passed:
            self.passed += 1
        else:
            self.failed += 1
        self.max_diff = max(self.max_diff, diff)
        self.diff_sum += diff

    def avg_diff(self) -> float:
        return self.diff_sum / self.total if self.total > 0 else 0.0

    def pass_rate(self) -> float:
        return (self.passed / self.total * 100) if self.total > 0 else 0.0

    def print_summary(self, title: str = "SUMMARY"):
        """Print formatted summary."""
        print()
        print("=" * 80)
        print(title)
        print("=" * 80)
        print(f"Total tests:   {self.total}")
        print(f"Passed:        {self.passed} ✓")
        print(f"Failed:        {self.failed} ✗")
        if self.total:
            print(f"Pass rate:     {self.pass_rate():.1f}%")
            print(f"Max diff:      {self.max_diff:.3e}")
            print(f"Avg diff:      {self.avg_diff():.3e}")
        print("=" * 80)


# ============================================================================
# COMMAND LINE HELPERS
# ============================================================================


def parse_args(args: List[str]) -> dict:
    """Parse common command line arguments."""
    return {
        "verbose": "--verbose" in args or "-v" in args,
        "help": "--help" in args or "-h" in args,
    }


def print_header(title: str):
    """Print formatted header."""
    print("=" * 80)
    print(title)
    print("=" * 80)
    print()
