"""Time-activated fee schedule.

A schedule is an ordered list of points, each activating a fee (in basis
points) at an offset from the pool's activation point. Typical launch pools
start with a high fee that steps or decays down to the long-term fee.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum

from amm_quote.constants import BPS_DENOMINATOR
from amm_quote.errors import ConfigurationError


class FeeCurveType(str, Enum):
    """How the fee moves between schedule points."""

    # Fee of the latest activated point
    FLAT = "flat"
    # Linear interpolation between the surrounding points
    LINEAR = "linear"


@dataclass(frozen=True)
class FeeSchedulePoint:
    """A fee that activates ``activation_offset`` after the activation point."""

    fee_bps: int
    activation_offset: int


@dataclass(frozen=True)
class FeeSchedule:
    """Ordered fee schedule. Offsets count from the owning pool's activation point.

    Attributes:
        points: Schedule points in non-decreasing activation order
        curve_type: Step (flat) or interpolated (linear) behaviour

    Raises:
        ConfigurationError: If points are empty, out of order or out of range
    """

    points: tuple[FeeSchedulePoint, ...]
    curve_type: FeeCurveType = FeeCurveType.FLAT

    def __post_init__(self) -> None:
        if not self.points:
            raise ConfigurationError("Fee schedule must contain at least one point")
        previous_offset = None
        for index, point in enumerate(self.points):
            if not 0 <= point.fee_bps <= BPS_DENOMINATOR:
                raise ConfigurationError(
                    f"Fee schedule point {index} has fee {point.fee_bps} bps outside [0, {BPS_DENOMINATOR}]"
                )
            if point.activation_offset < 0:
                raise ConfigurationError(f"Fee schedule point {index} has a negative offset")
            if previous_offset is not None and point.activation_offset < previous_offset:
                raise ConfigurationError(
                    f"Fee schedule point {index} activates at offset {point.activation_offset}, "
                    f"before the previous point at {previous_offset}"
                )
            previous_offset = point.activation_offset

    def activation_times(self, activation_point: int) -> list[int]:
        """Absolute activation point of each schedule point."""
        return [activation_point + p.activation_offset for p in self.points]

    def effective_fee_bps(self, activation_point: int, current_point: int) -> int:
        """Fee in basis points in force at ``current_point``, for a pool activated at ``activation_point``.

        Before the first activation the first point applies; after the last,
        the last point applies. A point is in force from its exact activation
        time onward.
        """
        times = self.activation_times(activation_point)
        # index of the latest point activated at or before current_point
        index = bisect_right(times, current_point) - 1
        if index < 0:
            return self.points[0].fee_bps
        if index == len(self.points) - 1 or self.curve_type is FeeCurveType.FLAT:
            return self.points[index].fee_bps

        start, end = times[index], times[index + 1]
        start_fee, end_fee = self.points[index].fee_bps, self.points[index + 1].fee_bps
        if end == start:
            return end_fee
        numerator = end_fee * (current_point - start) + start_fee * (end - current_point)
        return numerator // (end - start)
