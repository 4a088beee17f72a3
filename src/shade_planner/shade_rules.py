"""
Shade-rectangle constraint enforcement.

Clamps a proposed rectangle into the configured size bounds, then optionally
snaps it to the grid. Never rejects; always returns a corrected rectangle.
"""
import logging
import math
from typing import Optional

from shade_planner.contracts import ShadeConstraints, ShadeRectangle, Vec2
from shade_planner.units import PlanScale

logger = logging.getLogger(__name__)


def snap_value(value: float, step: float) -> float:
    """Nearest multiple of step; halves round toward +inf."""
    if step <= 0:
        return value
    return math.floor(value / step + 0.5) * step


def snap_point(x: float, y: float, step: float) -> Vec2:
    return (snap_value(x, step), snap_value(y, step))


def rect_from_drag(start: Vec2, end: Vec2) -> ShadeRectangle:
    """Rectangle spanned by two drag points, origin at the min corner."""
    return ShadeRectangle(
        x=min(start[0], end[0]),
        y=min(start[1], end[1]),
        width=abs(end[0] - start[0]),
        height=abs(end[1] - start[1]),
    )


def _clamp_extent(value: float, lo_ft: float, hi_ft: float, scale: PlanScale) -> float:
    # Both bounds test the incoming size; with min > max a size between
    # the two ends up at min.
    value_ft = scale.to_feet(value)
    if value_ft > hi_ft:
        value = scale.to_plan(hi_ft)
    if value_ft < lo_ft:
        value = scale.to_plan(lo_ft)
    return value


def constrain_shade_rectangle(
    rect: Optional[ShadeRectangle],
    constraints: ShadeConstraints,
    scale: PlanScale,
) -> Optional[ShadeRectangle]:
    """Apply size clamping and grid snapping to a proposed rectangle.

    Clamping only changes width/height; the origin stays put. Snapping runs
    after clamping and may move the result up to half a grid cell past a
    bound, which is not re-clamped.
    """
    if rect is None or not constraints.enabled:
        return rect

    width = _clamp_extent(rect.width, constraints.min_width, constraints.max_width, scale)
    height = _clamp_extent(rect.height, constraints.min_height, constraints.max_height, scale)
    x, y = rect.x, rect.y

    if (width, height) != (rect.width, rect.height):
        logger.debug(
            "Clamped shade %.1fx%.1f -> %.1fx%.1f plan units",
            rect.width, rect.height, width, height,
        )

    if constraints.snap_to_grid:
        step = scale.to_plan(constraints.grid_size)
        x, y = snap_point(x, y, step)
        width = snap_value(width, step)
        height = snap_value(height, step)

    return ShadeRectangle(x=x, y=y, width=width, height=height)
