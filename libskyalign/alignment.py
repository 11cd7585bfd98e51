"""
Alignment search for libskyalign.

Finds the calendar year at which a precessing celestial target, seen at its
best transit of the year, comes closest to a fixed architectural direction.

The error curve is sampled on a fixed 100-year grid. Between grid points it
has sub-century structure (the best-transit day jumps from year to year), so
a continuous optimiser would chase noise; the search is a plain fixed-step
descent and reports the local minimum at that resolution.

Functions:
- alignment_error_deg(): error angle for one year
- iter_alignment_search(): generator, one AlignmentStep per move
- search_alignment_year(): runs the generator to completion
- target_readout(): az/alt of a target plus its separation from a fixed direction
- great_circle_arc(): points along the arc between two directions
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from .constants import (
    ALIGNMENT_MAX_ITERATIONS,
    ALIGNMENT_STEP_YEARS,
    ALIGNMENT_TARGET_ERROR_DEG,
    ERROR_ARC_MAX_DEG,
    ERROR_ARC_MIN_SIN,
    ERROR_ARC_SEGMENTS,
)
from .coordinates import HorizontalDirection, target_direction
from .time_utils import TimeSpecification
from .transit import find_best_transit_time
from .utils import Vector, clamp, vunit

logger = logging.getLogger(__name__)

ErrorFunction = Callable[[int], float]


@dataclass(frozen=True)
class AlignmentStep:
    """One accepted move of the search."""

    iteration: int
    year: int
    error_deg: float
    error_minus: float
    error_plus: float


@dataclass(frozen=True)
class AlignmentResult:
    """Outcome of an alignment search."""

    year: int
    error_deg: float
    iterations: int


def best_transit_time_specification(target, year: int, observer) -> TimeSpecification:
    """TimeSpecification of the target's best transit in ``year``."""
    doy, hour = find_best_transit_time(target, year, observer.longitude_deg)
    return TimeSpecification.create(year, doy, hour)


def alignment_error_deg(
    target, fixed_direction: HorizontalDirection, year: int, observer
) -> float:
    """
    Angle in degrees between a fixed direction and a target at its best transit.

    Args:
        target: CelestialTarget (J2000)
        fixed_direction: HorizontalDirection of the sight-line
        year: Astronomical year
        observer: ObserverLocation
    """
    spec = best_transit_time_specification(target, year, observer)
    direction = target_direction(target, spec.julian_date, spec.julian_epoch, observer)
    return direction.separation_deg(fixed_direction)


def iter_alignment_search(
    start_year: int,
    year_range: Tuple[int, int],
    error_function: ErrorFunction,
    step: int = ALIGNMENT_STEP_YEARS,
    target_error: float = ALIGNMENT_TARGET_ERROR_DEG,
    max_iterations: int = ALIGNMENT_MAX_ITERATIONS,
) -> Iterator[AlignmentStep]:
    """
    Fixed-step descent over calendar years, one step per ``next()``.

    The caller may stop iterating at any time to cancel; the last yielded
    step is the best year found so far.

    Args:
        start_year: First year evaluated (clamped into ``year_range``)
        year_range: (min_year, max_year), inclusive
        error_function: Maps a year to an error in degrees
        step: Step size in years
        target_error: Stop once the error is at or below this value
        max_iterations: Hard cap on moves

    Yields:
        AlignmentStep for each move. Iteration 0 is the starting point.

    Algorithm:
        At each iteration evaluate the error at year - step and year + step
        (both clamped into the range). Move to the lower one if it is
        strictly better than the current error; on a tie between neighbours
        the earlier year wins. Stop at a local minimum, at the target error,
        or at the iteration cap.
    """
    lo, hi = year_range
    year = int(clamp(start_year, lo, hi))
    error = error_function(year)
    yield AlignmentStep(0, year, error, math.nan, math.nan)

    iterations = 0
    while error > target_error and iterations < max_iterations:
        year_minus = int(clamp(year - step, lo, hi))
        year_plus = int(clamp(year + step, lo, hi))
        error_minus = error_function(year_minus)
        error_plus = error_function(year_plus)

        logger.debug(
            "[%d] year=%d err=%.2f err-=%.2f err+=%.2f",
            iterations,
            year,
            error,
            error_minus,
            error_plus,
        )

        if error_minus < error and error_minus <= error_plus:
            year, error = year_minus, error_minus
        elif error_plus < error:
            year, error = year_plus, error_plus
        else:
            logger.debug("Local minimum at %d, error %.2f", year, error)
            return

        iterations += 1
        yield AlignmentStep(iterations, year, error, error_minus, error_plus)


def search_alignment_year(
    target,
    fixed_direction: HorizontalDirection,
    start_year: int,
    year_range: Optional[Tuple[int, int]] = None,
    observer=None,
    step: int = ALIGNMENT_STEP_YEARS,
    target_error: float = ALIGNMENT_TARGET_ERROR_DEG,
    max_iterations: int = ALIGNMENT_MAX_ITERATIONS,
    error_function: Optional[ErrorFunction] = None,
) -> AlignmentResult:
    """
    Find the year at which ``target`` best matches ``fixed_direction``.

    Args:
        target: CelestialTarget (J2000); unused when ``error_function`` is given
        fixed_direction: HorizontalDirection of the sight-line
        start_year: Year to start from
        year_range: (min_year, max_year); defaults to state.get_year_range()
        observer: ObserverLocation; defaults to the active site
        step: Step size in years (100)
        target_error: Early-exit threshold in degrees (0.5)
        max_iterations: Iteration cap (5000)
        error_function: Optional replacement error function year -> degrees

    Returns:
        AlignmentResult(year, error_deg, iterations)

    Example:
        >>> from libskyalign import get_target, get_alignment_direction
        >>> result = search_alignment_year(
        ...     get_target("alnilam"), get_alignment_direction("kings_south_shaft"), 2000
        ... )
    """
    if year_range is None or observer is None:
        from .state import get_current_site, get_year_range

        if year_range is None:
            year_range = get_year_range()
        if observer is None:
            observer = get_current_site()

    if error_function is None:

        def error_function(year: int) -> float:
            return alignment_error_deg(target, fixed_direction, year, observer)

    logger.info(
        "Alignment search from %d (step %d, target %.2f°)", start_year, step, target_error
    )

    last = None
    for last in iter_alignment_search(
        start_year, year_range, error_function, step, target_error, max_iterations
    ):
        pass

    result = AlignmentResult(year=last.year, error_deg=last.error_deg, iterations=last.iteration)
    logger.info(
        "Alignment search done: year %d, error %.2f°, %d iterations",
        result.year,
        result.error_deg,
        result.iterations,
    )
    return result


@dataclass(frozen=True)
class TargetReadout:
    """Textual readout of a target direction."""

    azimuth_deg: float
    altitude_deg: float
    separation_deg: Optional[float] = None

    @property
    def show_error_arc(self) -> bool:
        """The separation arc is only meaningful below 90°."""
        return self.separation_deg is not None and self.separation_deg < ERROR_ARC_MAX_DEG


def target_readout(
    target,
    time_spec: TimeSpecification,
    observer,
    fixed_direction: Optional[HorizontalDirection] = None,
) -> TargetReadout:
    """
    Azimuth/altitude of a target and its separation from a fixed direction.

    Args:
        target: CelestialTarget (J2000)
        time_spec: TimeSpecification
        observer: ObserverLocation
        fixed_direction: Optional sight-line to measure the separation from
    """
    direction = target_direction(target, time_spec.julian_date, time_spec.julian_epoch, observer)
    separation = None
    if fixed_direction is not None:
        separation = direction.separation_deg(fixed_direction)
    return TargetReadout(direction.azimuth_deg, direction.altitude_deg, separation)


def great_circle_arc(
    start: Vector, end: Vector, segments: int = ERROR_ARC_SEGMENTS
) -> List[Vector]:
    """
    Unit vectors along the great circle from ``start`` to ``end``.

    Uses spherical linear interpolation. When the two directions are nearly
    parallel (sin of the angle below 0.001) every point collapses to
    ``start``.

    Returns:
        ``segments`` vectors, first is ``start`` and last is ``end``
    """
    dot = clamp(sum(a * b for a, b in zip(start, end)), -1.0, 1.0)
    angle = math.acos(dot)
    sin_angle = math.sin(angle)

    points = []
    for i in range(segments):
        t = i / (segments - 1) if segments > 1 else 0.0
        if sin_angle > ERROR_ARC_MIN_SIN:
            a = math.sin((1 - t) * angle) / sin_angle
            b = math.sin(t * angle) / sin_angle
            p = vunit(tuple(a * s + b * e for s, e in zip(start, end)))
        else:
            p = tuple(start)
        points.append(p)
    return points

