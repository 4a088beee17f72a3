"""
Post-placement constraint enforcement.

Two separate mechanisms:

- a spacing gate that refuses a new post closer than the minimum spacing to
  any existing post (hard rejection, not a correction), with optional grid
  snapping of the incoming coordinate;
- precision placement corrections that relocate posts: the pairwise
  exact-distance pass, axis alignment, and the bulk re-layout.

All functions take a post sequence and return a new tuple; the input is
never modified.
"""
import logging
import math
from typing import Optional, Sequence, Tuple

from shade_planner.contracts import (
    AlignmentAxis,
    Post,
    PostConstraints,
    ShadeConstraints,
)
from shade_planner.shade_rules import snap_point
from shade_planner.units import PlanScale

logger = logging.getLogger(__name__)

# Pairs already within this many plan units of the target are left alone.
EXACT_DISTANCE_TOLERANCE_UNITS = 1.0

# Hit radius for picking a post on the plan, in plan units.
POST_PICK_TOLERANCE_UNITS = 15.0

Posts = Tuple[Post, ...]


# ─── Insertion / movement ────────────────────────────────────────────────────


def snap_incoming(
    x: float,
    y: float,
    constraints: ShadeConstraints,
    scale: PlanScale,
) -> Tuple[float, float]:
    """Grid-snap a pointer coordinate when shade constraints ask for it."""
    if constraints.enabled and constraints.snap_to_grid:
        return snap_point(x, y, scale.to_plan(constraints.grid_size))
    return (x, y)


def passes_spacing_gate(
    posts: Sequence[Post],
    x: float,
    y: float,
    constraints: ShadeConstraints,
    scale: PlanScale,
) -> bool:
    """False when (x, y) is closer than min_post_spacing to any post."""
    if not constraints.enabled:
        return True
    min_units = scale.to_plan(constraints.min_post_spacing)
    return all(math.hypot(p.x - x, p.y - y) >= min_units for p in posts)


def place_post(
    posts: Sequence[Post],
    x: float,
    y: float,
    constraints: ShadeConstraints,
    scale: PlanScale,
    post_id: Optional[str] = None,
) -> Posts:
    """Append a post at (x, y), or return the posts unchanged if refused."""
    x, y = snap_incoming(x, y, constraints, scale)
    if not passes_spacing_gate(posts, x, y, constraints, scale):
        logger.info(
            "Post at (%.1f, %.1f) refused: closer than %.1fft to an existing post",
            x, y, constraints.min_post_spacing,
        )
        return tuple(posts)
    post = Post(x=float(x), y=float(y)) if post_id is None else Post(float(x), float(y), post_id)
    return tuple(posts) + (post,)


def remove_post(posts: Sequence[Post], post_id: str) -> Posts:
    return tuple(p for p in posts if p.id != post_id)


def move_post(
    posts: Sequence[Post],
    post_id: str,
    x: float,
    y: float,
    constraints: ShadeConstraints,
    post_constraints: PostConstraints,
    scale: PlanScale,
) -> Posts:
    """Move one post (snapped), then re-apply precision corrections if on.

    The spacing gate does not apply to moves.
    """
    x, y = snap_incoming(x, y, constraints, scale)
    moved = tuple(p.moved(x, y) if p.id == post_id else p for p in posts)
    if post_constraints.enabled:
        moved = apply_post_constraints(moved, post_constraints, scale)
    return moved


def post_at(
    posts: Sequence[Post],
    x: float,
    y: float,
    tolerance: float = POST_PICK_TOLERANCE_UNITS,
) -> Optional[Post]:
    """First post (sequence order) within tolerance of (x, y)."""
    for post in posts:
        if math.hypot(post.x - x, post.y - y) <= tolerance:
            return post
    return None


# ─── Precision corrections ───────────────────────────────────────────────────


def apply_exact_distance(
    posts: Sequence[Post],
    exact_distance_ft: float,
    scale: PlanScale,
) -> Posts:
    """Single sequential pass over consecutive pairs (0,1), (1,2), ...

    The second post of each off-target pair is moved onto the target
    distance from the first, keeping the direction it was in. Each pair uses
    the already-corrected first post, so corrections cascade down the chain.
    """
    result = list(posts)
    target = scale.to_plan(exact_distance_ft)
    for i in range(len(result) - 1):
        a, b = result[i], result[i + 1]
        current = math.hypot(b.x - a.x, b.y - a.y)
        if abs(current - target) <= EXACT_DISTANCE_TOLERANCE_UNITS:
            continue
        angle = math.atan2(b.y - a.y, b.x - a.x)
        result[i + 1] = b.moved(
            a.x + target * math.cos(angle),
            a.y + target * math.sin(angle),
        )
        logger.debug(
            "Post %d moved to %.1f units from post %d (was %.1f)",
            i + 1, target, i, current,
        )
    return tuple(result)


def apply_alignment(posts: Sequence[Post], axis: AlignmentAxis) -> Posts:
    """Force every post after the first onto the first post's row/column."""
    if not posts:
        return ()
    first = posts[0]
    if axis == AlignmentAxis.HORIZONTAL:
        rest = [p.moved(p.x, first.y) for p in posts[1:]]
    else:
        rest = [p.moved(first.x, p.y) for p in posts[1:]]
    return (first, *rest)


def apply_post_constraints(
    posts: Sequence[Post],
    post_constraints: PostConstraints,
    scale: PlanScale,
) -> Posts:
    """Exact-distance pass then alignment. No-op when disabled or < 2 posts."""
    if not post_constraints.enabled or len(posts) < 2:
        return tuple(posts)
    result = tuple(posts)
    if post_constraints.exact_distance > 0:
        result = apply_exact_distance(result, post_constraints.exact_distance, scale)
    if post_constraints.parallel_alignment:
        result = apply_alignment(result, post_constraints.alignment_axis)
    return result


def constrain_all_posts(
    posts: Sequence[Post],
    post_constraints: PostConstraints,
    scale: PlanScale,
) -> Posts:
    """Bulk re-layout: sort by x, then space uniformly from the leftmost post.

    Destroys the original sequence order. Y is only touched when horizontal
    alignment is also requested.
    """
    if (
        not post_constraints.enabled
        or len(posts) < 2
        or post_constraints.exact_distance <= 0
    ):
        return tuple(posts)

    ordered = sorted(posts, key=lambda p: p.x)
    spacing = scale.to_plan(post_constraints.exact_distance)
    start_x = ordered[0].x
    align_y = (
        post_constraints.parallel_alignment
        and post_constraints.alignment_axis == AlignmentAxis.HORIZONTAL
    )
    result = tuple(
        p.moved(start_x + i * spacing, ordered[0].y if align_y else p.y)
        for i, p in enumerate(ordered)
    )
    logger.info(
        "Re-laid out %d posts at %.1fft spacing", len(result), post_constraints.exact_distance,
    )
    return result
