"""
Constraint violation reporting.

Lists every breach of the shade-size bounds and the pairwise post-spacing
bounds for a design. The same list drives the warning display and the
design-revision charge in the cost breakdown.
"""
import logging
from typing import List, Optional, Sequence

from shade_planner.contracts import (
    LayoutViolation,
    Post,
    ShadeConstraints,
    ShadeRectangle,
)
from shade_planner.measures import pairwise_distances_ft
from shade_planner.units import PlanScale

logger = logging.getLogger(__name__)


def check_layout_violations(
    posts: Sequence[Post],
    rect: Optional[ShadeRectangle],
    constraints: ShadeConstraints,
    scale: PlanScale,
) -> List[LayoutViolation]:
    """Run all layout checks.

    Args:
        posts: Posts in sequence order (indices in messages are 1-based).
        rect: Shade rectangle, or None if not drawn yet.
        constraints: Size and spacing bounds.
        scale: Plan-unit to feet mapping.

    Returns:
        Ordered violations; empty when constraints are disabled or there is
        no shade rectangle.
    """
    if not constraints.enabled or rect is None:
        return []

    violations: List[LayoutViolation] = []
    violations.extend(_check_shade_size(rect, constraints, scale))
    violations.extend(_check_post_spacing(posts, constraints, scale))

    if violations:
        logger.debug("Layout has %d constraint violation(s)", len(violations))
    return violations


# ─── Individual checks ───────────────────────────────────────────────────────


def _check_shade_size(
    rect: ShadeRectangle,
    constraints: ShadeConstraints,
    scale: PlanScale,
) -> List[LayoutViolation]:
    """Width above max, width below min, height above max, height below min."""
    violations = []
    width_ft = scale.to_feet(rect.width)
    height_ft = scale.to_feet(rect.height)

    checks = [
        ("Width", width_ft, constraints.min_width, constraints.max_width),
        ("Height", height_ft, constraints.min_height, constraints.max_height),
    ]
    for label, value, lo, hi in checks:
        key = label.lower()
        if value > hi:
            violations.append(LayoutViolation(
                rule_name=f"shade_{key}_max",
                message=f"{label} {value:.1f}ft exceeds maximum {hi:g}ft",
                value=value,
                limit=hi,
            ))
        if value < lo:
            violations.append(LayoutViolation(
                rule_name=f"shade_{key}_min",
                message=f"{label} {value:.1f}ft below minimum {lo:g}ft",
                value=value,
                limit=lo,
            ))
    return violations


def _check_post_spacing(
    posts: Sequence[Post],
    constraints: ShadeConstraints,
    scale: PlanScale,
) -> List[LayoutViolation]:
    """Every unordered pair (i < j) outside [min_post_spacing, max_post_spacing]."""
    violations = []
    if len(posts) < 2:
        return violations

    dist = pairwise_distances_ft(posts, scale)
    n = len(posts)
    for i in range(n):
        for j in range(i + 1, n):
            d = float(dist[i, j])
            pair = (i + 1, j + 1)
            if d < constraints.min_post_spacing:
                violations.append(LayoutViolation(
                    rule_name="post_spacing_min",
                    message=(
                        f"Posts {i + 1} and {j + 1} are {d:.1f}ft apart "
                        f"(min: {constraints.min_post_spacing:g}ft)"
                    ),
                    value=d,
                    limit=constraints.min_post_spacing,
                    post_indices=pair,
                ))
            if d > constraints.max_post_spacing:
                violations.append(LayoutViolation(
                    rule_name="post_spacing_max",
                    message=(
                        f"Posts {i + 1} and {j + 1} are {d:.1f}ft apart "
                        f"(max: {constraints.max_post_spacing:g}ft)"
                    ),
                    value=d,
                    limit=constraints.max_post_spacing,
                    post_indices=pair,
                ))
    return violations
